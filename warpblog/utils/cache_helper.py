"""
缓存工具
在 Flask-Caching 之上提供 get-or-compute 语义
"""
import threading
from collections import defaultdict

_locks = defaultdict(threading.Lock)
_locks_guard = threading.Lock()


def _lock_for(key):
    with _locks_guard:
        return _locks[key]


def get_or_compute(cache, key, compute, timeout=None):
    """
    读取缓存，未命中时调用 compute() 生成并写入
    同一进程内对同一个 key 的并发未命中只计算一次，其余请求等待后复用结果；
    多进程部署时各进程可能各自计算一次，结果相同，可以接受。
    :param cache: flask_caching.Cache 实例
    :param timeout: 新鲜期 (秒)，None 使用缓存默认值
    """
    value = cache.get(key)
    if value is not None:
        return value
    with _lock_for(key):
        # 等锁期间可能已被其他请求写入
        value = cache.get(key)
        if value is None:
            value = compute()
            cache.set(key, value, timeout=timeout)
    return value
