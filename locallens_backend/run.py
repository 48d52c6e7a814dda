# run.py
import logging
import os
import sys

from dotenv import load_dotenv

basedir = os.path.abspath(os.path.dirname(__file__))
# 이 디렉터리 안의 '.env' 파일을 로드합니다.
load_dotenv(dotenv_path=os.path.join(basedir, '.env'))

from locallens import create_app

try:
    app = create_app()
except Exception as e:
    # 시작 시 저장소에 접속할 수 없으면 프로세스를 종료합니다.
    logging.critical(f"서버를 시작할 수 없습니다: {e}")
    sys.exit(1)

if __name__ == '__main__':
    host = os.getenv('FLASK_RUN_HOST', '127.0.0.1')
    port = int(os.getenv('FLASK_RUN_PORT', 5000))
    debug = app.config.get('DEBUG', False)
    app.run(host=host, port=port, debug=debug)
