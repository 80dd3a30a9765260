from flask import request, jsonify, current_app
from warpblog.blueprints.categories import categories_bp
from warpblog.blueprints.categories.forms import CategoryForm, UpdateCategoryForm
from warpblog.exceptions import InvalidParameter
from warpblog.models.auth import Role
from warpblog.services.article_service import ArticleService
from warpblog.services.category_service import CategoryService
from warpblog.utils.helpers import page_to_dict
from warpblog.utils.permissions import role_required
from warpblog.utils.validators import validate_form, is_provided


@categories_bp.route('', methods=['GET'])
def list_categories():
    """全部分类，按 display_order 排序"""
    categories = CategoryService.get_categories()
    return jsonify({'categories': [c.to_dict() for c in categories]})


@categories_bp.route('/<int:id>', methods=['GET'])
def get_category(id):
    return jsonify(CategoryService.get_category(id).to_dict())


@categories_bp.route('/<int:id>/articles', methods=['GET'])
def category_articles(id):
    """分类下已发布的文章 (分页)"""
    page = request.args.get('page', 1, type=int)
    pagination = ArticleService.get_articles_by_category(
        id, page, current_app.config['ARTICLES_PER_PAGE'])
    return jsonify({
        'page': page_to_dict(pagination),
        'articles': [a.to_dict() for a in pagination.items]
    })


@categories_bp.route('', methods=['POST'])
@role_required(Role.ADMIN)
def create_category():
    form = validate_form(CategoryForm())
    category = CategoryService.create_category(form.name.data, form.description.data or '')
    return jsonify(category.to_dict())


@categories_bp.route('/sort', methods=['POST'])
@role_required(Role.ADMIN)
def sort_categories():
    """
    调整分类顺序
    请求体: {"id": [id1, id2, ...]}，必须是全部分类 id 的一个排列
    """
    payload = request.get_json(silent=True)
    if payload is not None:
        ids = payload.get('id') if isinstance(payload, dict) else None
    else:
        ids = request.form.getlist('id') or None
    if ids is None:
        raise InvalidParameter('id', 'Invalid id list.')
    CategoryService.sort_categories(ids)
    return jsonify({'sort': True})


@categories_bp.route('/<int:id>', methods=['POST'])
@role_required(Role.ADMIN)
def update_category(id):
    form = validate_form(UpdateCategoryForm())
    category = CategoryService.update_category(
        id,
        name=form.name.data if is_provided(form.name) else None,
        description=form.description.data if is_provided(form.description) else None)
    return jsonify(category.to_dict())


@categories_bp.route('/<int:id>/delete', methods=['POST'])
@role_required(Role.ADMIN)
def delete_category(id):
    CategoryService.delete_category(id)
    return jsonify({'id': id})
