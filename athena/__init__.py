"""
Athena 账户服务
账户与动态资料记录的服务层：分页筛选查询、登录名唯一、Argon2 密码哈希、软删除
"""

__version__ = "0.1.0"
