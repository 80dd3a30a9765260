"""
全文检索协作接口
默认不接入任何检索引擎，index / unindex 只记录日志。
需要检索时在 create_app 之后替换 search_engine 即可。
"""
from flask import current_app


class NullSearchEngine:
    """空实现"""

    def index(self, article):
        current_app.logger.debug(f'search index skipped: article {article.id}')

    def unindex(self, article_id):
        current_app.logger.debug(f'search unindex skipped: article {article_id}')


search_engine = NullSearchEngine()
