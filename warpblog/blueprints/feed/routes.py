from flask import current_app, request, redirect, url_for, Response
from warpblog.blueprints.feed import feed_bp
from warpblog.extensions import cache
from warpblog.services.feed_service import FeedService


def get_feed_service():
    """每个 app 一个 FeedService，缓存与新鲜期取自配置"""
    service = current_app.extensions.get('warpblog.feed')
    if service is None:
        service = FeedService(
            cache,
            timeout=current_app.config['FEED_CACHE_TIMEOUT'],
            max_items=current_app.config['FEED_MAX_ITEMS'],
            https=current_app.config['SESSION_HTTPS'])
        current_app.extensions['warpblog.feed'] = service
    return service


@feed_bp.route('')
def index():
    return redirect(url_for('feed.articles'))


@feed_bp.route('/articles')
def articles():
    """最近文章 RSS 2.0"""
    service = get_feed_service()
    rss = service.get_feed(request.host)
    response = Response(rss, mimetype='text/xml')
    response.headers['Cache-Control'] = f'max-age={service.timeout}'
    return response
