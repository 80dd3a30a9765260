# 按照依赖顺序导入
from .base import BaseModel
from .auth import User, Role, has_role
from .content import Category, Article, Text, Attachment
from .sys import Setting
