"""Unit tests for gravatar URL derivation."""

import hashlib

from infrastructure.avatar import gravatar_url


class TestGravatarUrl:
    def test_uses_md5_of_normalized_email(self):
        digest = hashlib.md5(b"ada@example.com").hexdigest()

        url = gravatar_url(" Ada@Example.com ", size=200, rating="pg", default="mm")

        assert url == f"https://www.gravatar.com/avatar/{digest}?s=200&r=pg&d=mm"

    def test_same_email_gives_same_url(self):
        assert gravatar_url("ada@example.com") == gravatar_url("ADA@example.com")
