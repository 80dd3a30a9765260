from flask import request, jsonify, current_app
from warpblog.blueprints.articles import articles_bp
from warpblog.blueprints.articles.forms import ArticleForm, UpdateArticleForm
from warpblog.models.auth import Role, has_role
from warpblog.services.article_service import ArticleService
from warpblog.utils.helpers import page_to_dict
from warpblog.utils.markdown_helper import markdown_to_html
from warpblog.utils.permissions import role_required, get_current_user
from warpblog.utils.validators import validate_form, provided_data


@articles_bp.route('', methods=['GET'])
def list_articles():
    """
    分页获取文章
    CONTRIBUTOR 及以上角色可以看到未发布的文章
    """
    page = request.args.get('page', 1, type=int)
    user = get_current_user()
    pagination = ArticleService.get_articles(
        page,
        current_app.config['ARTICLES_PER_PAGE'],
        include_unpublished=has_role(user, Role.CONTRIBUTOR))
    return jsonify({
        'page': page_to_dict(pagination),
        'articles': [a.to_dict() for a in pagination.items]
    })


@articles_bp.route('/<int:id>', methods=['GET'])
def get_article(id):
    """
    获取文章及正文
    ?format=html 时正文渲染为 HTML；无权查看的未发布文章返回 404
    """
    article = ArticleService.get_visible_article(id, get_current_user())
    data = article.to_dict()
    if request.args.get('format') == 'html':
        data['content'] = markdown_to_html(article.content, safe=True)
    return jsonify(data)


@articles_bp.route('', methods=['POST'])
@role_required(Role.EDITOR)
def create_article():
    form = validate_form(ArticleForm())
    article = ArticleService.create_article(get_current_user(), provided_data(form))
    return jsonify(article.to_dict())


@articles_bp.route('/<int:id>', methods=['POST'])
@role_required(Role.EDITOR)
def update_article(id):
    form = validate_form(UpdateArticleForm())
    article = ArticleService.update_article(get_current_user(), id, provided_data(form))
    return jsonify(article.to_dict())


@articles_bp.route('/<int:id>/delete', methods=['POST'])
@role_required(Role.EDITOR)
def delete_article(id):
    ArticleService.delete_article(get_current_user(), id)
    return jsonify({'id': id})
