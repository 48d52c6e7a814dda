# locallens_client/api.py

import logging
from typing import Any, Dict, List, Optional

import requests

# 서버가 준비되지 않았을 때 사용할 기본 데이터
FALLBACK_CATEGORIES = [
    {"id": "1", "name": "Events"},
    {"id": "2", "name": "Lost & Found"},
    {"id": "3", "name": "Services"},
    {"id": "4", "name": "News"},
    {"id": "5", "name": "For Sale"},
    {"id": "6", "name": "Housing"},
    {"id": "7", "name": "Jobs"},
    {"id": "8", "name": "Discussion"},
]
FALLBACK_LOCATIONS = ["Erode", "Coimbatore", "Tiruppur", "Salem"]

AUTH_HEADER = "x-auth-token"


class ApiError(Exception):
    """서버가 오류를 응답했거나 서버에 연결할 수 없는 경우."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class LocalLensClient:
    """
    LocalLens REST API 클라이언트.

    로그인/회원가입에 성공하면 세션 토큰을 보관했다가 이후 모든 요청의 'x-auth-token' 헤더로 보냅니다.
    use_fallback_data=True 이면 카테고리/지역 조회가 연결 실패나 5xx 응답일 때 기본 데이터를 돌려줍니다.
    """

    def __init__(self, base_url: str = "http://localhost:5000/api", use_fallback_data: bool = False,
                 timeout: float = 10, session: Optional[requests.Session] = None):
        self.base_url = base_url.rstrip('/')
        self.use_fallback_data = use_fallback_data
        self.timeout = timeout
        self.session = session or requests.Session()
        self.token: Optional[str] = None
        self.user: Optional[Dict[str, Any]] = None

    # -------------------------------
    # 공통 요청 처리
    # -------------------------------
    def _request(self, method: str, path: str, **kwargs) -> Any:
        headers = {"Content-Type": "application/json"}
        if self.token:
            headers[AUTH_HEADER] = self.token
        try:
            res = self.session.request(method, f"{self.base_url}{path}", headers=headers, timeout=self.timeout, **kwargs)
        except requests.RequestException as e:
            raise ApiError(f"서버에 연결할 수 없습니다: {e}") from e

        if res.status_code >= 400:
            try:
                body = res.json()
            except ValueError:
                body = {}
            message = body.get("msg") or body.get("error") or f"Request failed with status {res.status_code}"
            raise ApiError(message, status_code=res.status_code)
        return res.json()

    def _with_fallback(self, fetch, fallback, what: str):
        try:
            return fetch()
        except ApiError as e:
            # 4xx 는 클라이언트 잘못이므로 기본 데이터로 가리지 않습니다.
            server_down = e.status_code is None or e.status_code >= 500
            if not (self.use_fallback_data and server_down):
                raise
            logging.warning(f"{what} 조회 실패, 기본 데이터를 사용합니다: {e.message}")
            return list(fallback)

    # -------------------------------
    # Authentication
    # -------------------------------
    def _store_session(self, data: Dict[str, Any]) -> Dict[str, Any]:
        self.token = data["token"]
        self.user = data["user"]
        return self.user

    def login(self, email: str, password: str) -> Dict[str, Any]:
        return self._store_session(self._request("POST", "/auth/login", json={"email": email, "password": password}))

    def register(self, username: str, email: str, password: str) -> Dict[str, Any]:
        payload = {"username": username, "email": email, "password": password}
        return self._store_session(self._request("POST", "/auth/register", json=payload))

    def logout(self) -> None:
        self.token = None
        self.user = None

    def get_current_user(self) -> Optional[Dict[str, Any]]:
        """서버에 토큰이 아직 유효한지 확인합니다. 401 이면 보관 중인 세션을 지웁니다."""
        if not self.token:
            return None
        try:
            self.user = self._request("GET", "/auth/user")
            return self.user
        except ApiError as e:
            if e.status_code == 401:
                self.logout()
                return None
            raise

    # -------------------------------
    # Posts
    # -------------------------------
    def fetch_posts(self, category: Optional[str] = None, location: Optional[str] = None,
                    sort: Optional[str] = None, user_id: Optional[str] = None) -> List[Dict[str, Any]]:
        params = {"category": category, "location": location, "sort": sort, "userId": user_id}
        return self._request("GET", "/posts", params={k: v for k, v in params.items() if v})

    def fetch_post(self, post_id: str) -> Optional[Dict[str, Any]]:
        try:
            return self._request("GET", f"/posts/{post_id}")
        except ApiError as e:
            if e.status_code == 404:
                return None
            raise

    def create_post(self, title: str, content: str, category: str, location: str) -> Dict[str, Any]:
        payload = {"title": title, "content": content, "category": category, "location": location}
        return self._request("POST", "/posts", json=payload)

    def update_post(self, post_id: str, **fields) -> Dict[str, Any]:
        return self._request("PUT", f"/posts/{post_id}", json=fields)

    def delete_post(self, post_id: str) -> bool:
        self._request("DELETE", f"/posts/{post_id}")
        return True

    def thank_post(self, post_id: str) -> Dict[str, Any]:
        return self._request("PUT", f"/posts/{post_id}/thank")

    # -------------------------------
    # Lookups
    # -------------------------------
    def fetch_categories(self) -> List[Dict[str, Any]]:
        return self._with_fallback(lambda: self._request("GET", "/categories"), FALLBACK_CATEGORIES, "카테고리")

    def fetch_locations(self) -> List[str]:
        return self._with_fallback(lambda: self._request("GET", "/locations"), FALLBACK_LOCATIONS, "지역")
