from flask import Blueprint

# 注意：url_prefix 在 newsportal/__init__.py 注册时设置，这里不重复设置
pages_bp = Blueprint('pages', __name__)

from . import routes
