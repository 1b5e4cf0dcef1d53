"""
密码哈希单元测试
"""

from athena.core.security import hash_password, needs_rehash, verify_password


class TestPasswordHashing:
    """测试 Argon2 哈希"""

    def test_hash_is_argon2id(self):
        """测试使用 Argon2id 算法"""
        assert hash_password("s3cret-passw0rd").startswith("$argon2id$")

    def test_hash_is_salted(self):
        """测试同一密码两次哈希结果不同"""
        assert hash_password("s3cret-passw0rd") != hash_password("s3cret-passw0rd")

    def test_verify(self):
        """测试校验正确与错误的密码"""
        password_hash = hash_password("s3cret-passw0rd")

        assert verify_password("s3cret-passw0rd", password_hash) is True
        assert verify_password("wrong-password", password_hash) is False

    def test_verify_malformed_hash(self):
        """测试哈希格式错误时返回 False 而不是抛出异常"""
        assert verify_password("s3cret-passw0rd", "not-a-hash") is False

    def test_fresh_hash_does_not_need_rehash(self):
        """测试按当前参数生成的哈希不需要重新哈希"""
        assert needs_rehash(hash_password("s3cret-passw0rd")) is False
