"""
聚类异常定义
"""


class InvalidArgumentError(ValueError):
    """聚类参数或输入数据不合法"""
