# locallens/api/categories/routes.py
from flask import Blueprint, jsonify, current_app

from locallens.api.categories.schemas import CategorySchema

categories_bp = Blueprint('categories_bp', __name__)


@categories_bp.route('/categories', methods=['GET'])
def get_categories():
    """카테고리 목록. 최초 호출 시 기본 카테고리가 생성됩니다."""
    category_service = current_app.services['categories']
    categories = category_service.list_categories()
    return jsonify(CategorySchema(many=True).dump(categories)), 200


@categories_bp.route('/locations', methods=['GET'])
def get_locations():
    category_service = current_app.services['categories']
    return jsonify(category_service.list_locations()), 200
