from datetime import datetime
from newsportal.extensions import db


class BaseModel(db.Model):
    """
    门户模型基类
    包含：ID主键, 创建时间, 更新时间
    """
    __abstract__ = True

    id = db.Column(db.Integer, primary_key=True, autoincrement=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, index=True)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def delete(self):
        """物理删除"""
        db.session.delete(self)
        db.session.commit()

    def touch(self):
        """子集合整体替换时主记录本身可能无字段变化，手动刷新更新时间"""
        self.updated_at = datetime.utcnow()
