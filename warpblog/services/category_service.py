"""分类管理服务"""
from flask import current_app
from sqlalchemy import func
from warpblog.extensions import db
from warpblog.exceptions import NotFound, InvalidParameter, ResourceConflict
from warpblog.models.content import Category, Article


class CategoryService:
    """分类服务"""

    @staticmethod
    def get_categories():
        """按 display_order 排序的全部分类"""
        return Category.query.order_by(Category.display_order, Category.id).all()

    @staticmethod
    def get_category(category_id):
        category = db.session.get(Category, category_id)
        if category is None:
            raise NotFound('Category')
        return category

    @staticmethod
    def create_category(name, description=''):
        """新建分类，排在最后 (当前最大 display_order + 1，没有分类时为 0)"""
        max_order = db.session.query(func.max(Category.display_order)).scalar()
        category = Category(
            name=name.strip(),
            description=(description or '').strip(),
            display_order=0 if max_order is None else max_order + 1
        )
        category.save()
        return category

    @staticmethod
    def update_category(category_id, name=None, description=None):
        """
        修改分类，只修改传入的字段
        name 传了空字符串视为非法参数
        """
        if name is not None and not name.strip():
            raise InvalidParameter('name')
        category = CategoryService.get_category(category_id)
        if name is not None:
            category.name = name.strip()
        if description is not None:
            category.description = description.strip()
        db.session.commit()
        return category

    @staticmethod
    def _update_display_order(category_id, display_order):
        """只更新 display_order 一列 (不提交)"""
        Category.query.filter_by(id=category_id).update(
            {'display_order': display_order}, synchronize_session=False)

    @staticmethod
    def _parse_id(value):
        """只接受整数或纯数字字符串，bool / 小数等一律视为非法 id"""
        if type(value) is int:
            return value
        if isinstance(value, str) and value.strip().isdecimal():
            return int(value.strip())
        raise InvalidParameter('id', 'Invalid id parameters.')

    @staticmethod
    def sort_categories(ids):
        """
        按提交的 id 顺序重排全部分类，在一个事务中完成，要么全部生效要么全部不变
        :param ids: 所有分类 id 的一个排列；单个 id 视为只有一个元素的列表
        """
        if not isinstance(ids, (list, tuple)):
            ids = [ids]
        ids = [CategoryService._parse_id(i) for i in ids]

        categories = Category.query.all()
        if len(categories) != len(ids):
            raise InvalidParameter('id', 'Invalid id list.')

        # 先完成全部校验再修改：某个分类不在列表中说明有重复或未知 id
        changes = []
        for category in categories:
            if category.id not in ids:
                raise InvalidParameter('id', 'Invalid id parameters.')
            position = ids.index(category.id)
            if category.display_order != position:
                changes.append((category.id, position))

        try:
            for category_id, position in changes:
                CategoryService._update_display_order(category_id, position)
            db.session.commit()
        except Exception:
            db.session.rollback()
            current_app.logger.warning('category sort: tx rollbacked')
            raise
        current_app.logger.info(f'category sort: tx committed, {len(changes)} changed')
        return True

    @staticmethod
    def delete_category(category_id):
        """
        删除分类；仍有文章引用时拒绝删除
        注意：检查与删除之间没有加锁，期间新建的文章可能引用该分类
        """
        category = CategoryService.get_category(category_id)
        in_use = Article.query.filter_by(category_id=category.id).count()
        if in_use > 0:
            raise ResourceConflict('Category', 'Category is in use and cannot be deleted.')
        category.delete()
        return category_id
