"""文章服务"""
from flask import current_app
from warpblog.extensions import db
from warpblog.exceptions import NotFound, PermissionDenied
from warpblog.models.auth import Role, has_role
from warpblog.models.content import Article
from warpblog.services import search_service
from warpblog.services.attachment_service import AttachmentService
from warpblog.services.category_service import CategoryService
from warpblog.services.text_service import TextService
from warpblog.utils.helpers import format_tags, now_millis
from warpblog.utils.permissions import is_owner_or_admin


class ArticleService:

    # ---------- 查询 ----------

    @staticmethod
    def get_recent_articles(max_count):
        """最近已发布的文章 (publish_at < now)，按发布时间倒序"""
        return Article.query \
            .filter(Article.publish_at < now_millis()) \
            .order_by(Article.publish_at.desc(), Article.id.desc()) \
            .limit(max_count) \
            .all()

    @staticmethod
    def get_articles(page, per_page, include_unpublished=False):
        """分页获取文章，返回 Flask-SQLAlchemy 分页对象"""
        query = Article.query
        if not include_unpublished:
            query = query.filter(Article.publish_at < now_millis())
        return query.order_by(Article.publish_at.desc(), Article.id.desc()) \
            .paginate(page=page, per_page=per_page, error_out=False)

    @staticmethod
    def get_articles_by_category(category_id, page, per_page):
        """分页获取某分类下已发布的文章"""
        category = CategoryService.get_category(category_id)
        return Article.query \
            .filter(Article.publish_at < now_millis(), Article.category_id == category.id) \
            .order_by(Article.publish_at.desc(), Article.id.desc()) \
            .paginate(page=page, per_page=per_page, error_out=False)

    @staticmethod
    def get_article(article_id, include_content=False):
        article = db.session.get(Article, article_id)
        if article is None:
            raise NotFound('Article')
        if include_content:
            article.content = TextService.get_text(article.content_id).value
        return article

    @staticmethod
    def is_visible(article, user):
        """未到发布时间的文章只对 CONTRIBUTOR 及以上角色可见 (与列表、RSS 一致：publish_at < now 才算已发布)"""
        if article.publish_at < now_millis():
            return True
        return has_role(user, Role.CONTRIBUTOR)

    @staticmethod
    def get_visible_article(article_id, user):
        """
        读取文章及正文；对当前用户不可见时按不存在处理，不暴露文章是否存在
        """
        article = ArticleService.get_article(article_id)
        if not ArticleService.is_visible(article, user):
            raise NotFound('Article')
        article.content = TextService.get_text(article.content_id).value
        return article

    # ---------- 修改 ----------

    @staticmethod
    def create_article(user, data):
        """
        新建文章，封面、文章、正文在同一个事务中写入
        :param data: 已校验的字段 dict (category_id, name, description, content, tags, publish_at, image)
        """
        category = CategoryService.get_category(data['category_id'])
        name = data['name'].strip()
        description = data['description'].strip()
        try:
            cover_id = None
            if data.get('image'):
                attachment = AttachmentService.create_attachment(
                    user.id,
                    name,
                    description,
                    AttachmentService.decode_image(data['image']),
                    None,
                    True)
                cover_id = attachment.id

            publish_at = data.get('publish_at')
            article = Article(
                user_id=user.id,
                user_name=user.name,
                category_id=category.id,
                cover_id=cover_id,
                name=name,
                description=description,
                tags=format_tags(data.get('tags')),
                publish_at=now_millis() if publish_at is None else publish_at
            )
            db.session.add(article)
            db.session.flush()  # 获取 article.id

            text = TextService.create_text(article.id, data['content'])
            article.content_id = text.id
            db.session.commit()
        except Exception:
            db.session.rollback()
            raise

        current_app.logger.info(f'article {article.id} created by user {user.id}')
        article.content = data['content']
        search_service.search_engine.index(article)
        return article

    @staticmethod
    def update_article(user, article_id, data):
        """
        修改文章，只修改 data 中出现的字段
        新正文写入新的 Text 记录，旧版本保留到文章删除时一并删除；
        新封面替换旧封面，旧封面附件在同一事务中删除。
        """
        article = ArticleService.get_article(article_id)
        if not is_owner_or_admin(user, article.user_id):
            raise PermissionDenied()
        try:
            if 'category_id' in data:
                category = CategoryService.get_category(data['category_id'])
                article.category_id = category.id
            if 'name' in data:
                article.name = data['name'].strip()
            if 'description' in data:
                article.description = data['description'].strip()
            if 'tags' in data:
                article.tags = format_tags(data['tags'])
            if data.get('publish_at') is not None:
                article.publish_at = data['publish_at']
            if data.get('image'):
                attachment = AttachmentService.create_attachment(
                    user.id,
                    article.name,
                    article.description,
                    AttachmentService.decode_image(data['image']),
                    None,
                    True)
                old_cover_id = article.cover_id
                article.cover_id = attachment.id
                db.session.flush()
                AttachmentService.delete_attachment(old_cover_id)
            if 'content' in data:
                text = TextService.create_text(article.id, data['content'])
                article.content_id = text.id
            db.session.commit()
        except Exception:
            db.session.rollback()
            raise

        current_app.logger.info(f'article {article.id} updated by user {user.id}')
        if 'content' in data:
            article.content = data['content']
        else:
            article.content = TextService.get_text(article.content_id).value
        search_service.search_engine.index(article)
        return article

    @staticmethod
    def delete_article(user, article_id):
        """删除文章，正文的全部版本和封面在同一事务中删除"""
        article = ArticleService.get_article(article_id)
        if not is_owner_or_admin(user, article.user_id):
            raise PermissionDenied()
        cover_id = article.cover_id
        try:
            TextService.delete_texts(article.id)
            db.session.delete(article)
            db.session.flush()
            AttachmentService.delete_attachment(cover_id)
            db.session.commit()
        except Exception:
            db.session.rollback()
            raise

        current_app.logger.info(f'article {article_id} deleted by user {user.id}')
        search_service.search_engine.unindex(article_id)
        return article_id
