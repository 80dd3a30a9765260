"""RSS 订阅服务"""
from flask import current_app
from warpblog.services.article_service import ArticleService
from warpblog.services.setting_service import SettingService
from warpblog.services.text_service import TextService
from warpblog.utils.cache_helper import get_or_compute
from warpblog.utils.helpers import to_rss_date
from warpblog.utils.markdown_helper import markdown_to_html

ARTICLE_FEED_KEY = 'feed:articles'
GENERATOR = 'WarpBlog'


def cdata(value):
    """包装为 CDATA，内容中的 ']]>' 拆成两段"""
    return '<![CDATA[' + (value or '').replace(']]>', ']]]]><![CDATA[>') + ']]>'


class FeedService:
    """
    生成最近文章的 RSS 2.0 文档
    生成结果按 key 缓存 timeout 秒，期间不会感知文章的新增或修改
    """

    def __init__(self, cache, key=ARTICLE_FEED_KEY, timeout=3600, max_items=20, https=False):
        self.cache = cache
        self.key = key
        self.timeout = timeout
        self.max_items = max_items
        self.https = https

    def get_feed(self, host):
        return get_or_compute(self.cache, self.key, lambda: self.build_feed(host), timeout=self.timeout)

    def build_feed(self, host):
        current_app.logger.info('generate rss...')
        schema = 'https://' if self.https else 'http://'
        url_prefix = schema + host + '/article/'
        articles = ArticleService.get_recent_articles(self.max_items)
        last_publish_at = articles[0].publish_at if articles else 0
        website = SettingService.get_website_settings()

        rss = ['<?xml version="1.0"?>\n']
        rss.append('<rss version="2.0"><channel><title>')
        rss.append(cdata(website['name']))
        rss.append('</title><link>')
        rss.append(schema + host + '/')
        rss.append('</link><description>')
        rss.append(cdata(website['description']))
        rss.append('</description><lastBuildDate>')
        rss.append(to_rss_date(last_publish_at))
        rss.append('</lastBuildDate><generator>')
        rss.append(GENERATOR)
        rss.append('</generator><ttl>')
        rss.append(str(self.timeout))
        rss.append('</ttl>')
        for article in articles:
            # 正文缺失说明数据损坏，直接抛出 NotFound
            text = TextService.get_text(article.content_id)
            url = url_prefix + str(article.id)
            rss.append('<item><title>')
            rss.append(cdata(article.name))
            rss.append('</title><link>')
            rss.append(url)
            rss.append('</link><guid>')
            rss.append(url)
            rss.append('</guid><author>')
            rss.append(cdata(article.user_name))
            rss.append('</author><pubDate>')
            rss.append(to_rss_date(article.publish_at))
            rss.append('</pubDate><description>')
            rss.append(cdata(markdown_to_html(text.value)))
            rss.append('</description></item>')
        rss.append('</channel></rss>')
        return ''.join(rss)
