import asyncio
import base64
import json
import time
import unittest
from dataclasses import replace
from types import SimpleNamespace
from unittest.mock import patch

import jwt
from fastapi import HTTPException

from socialshop.auth import deps


def run_async(coro):
    return asyncio.run(coro)


def unsigned_token(claims):
    header = base64.urlsafe_b64encode(json.dumps({"alg": "none"}).encode()).decode().rstrip("=")
    payload = base64.urlsafe_b64encode(json.dumps(claims).encode()).decode().rstrip("=")
    return f"{header}.{payload}."


class TestDevFallbackAuth(unittest.TestCase):
    def setUp(self):
        patcher = patch.object(deps, "S", replace(deps.S, jwt_secret=""))
        patcher.start()
        self.addCleanup(patcher.stop)

    def test_requires_header(self):
        req = SimpleNamespace(headers={})
        with self.assertRaises(HTTPException) as ctx:
            run_async(deps.get_authenticated_user_id(req))
        self.assertEqual(ctx.exception.status_code, 401)

    def test_rejects_invalid_scheme(self):
        req = SimpleNamespace(headers={"authorization": "Token abc"})
        with self.assertRaises(HTTPException) as ctx:
            run_async(deps.get_authenticated_user_id(req))
        self.assertEqual(ctx.exception.status_code, 401)

    def test_accepts_raw_bearer(self):
        req = SimpleNamespace(headers={"authorization": "Bearer user-1"})
        self.assertEqual(run_async(deps.get_authenticated_user_id(req)), "user-1")

    def test_prefers_user_id_claim(self):
        token = unsigned_token({"userId": "jwt-user", "sub": "other"})
        req = SimpleNamespace(headers={"authorization": f"Bearer {token}"})
        self.assertEqual(run_async(deps.get_authenticated_user_id(req)), "jwt-user")

    def test_x_user_id_header(self):
        req = SimpleNamespace(headers={"x-user-id": "header-user"})
        self.assertEqual(run_async(deps.get_authenticated_user_id(req)), "header-user")


class TestJwtAuth(unittest.TestCase):
    secret = "unit-test-secret"

    def setUp(self):
        patcher = patch.object(deps, "S", replace(deps.S, jwt_secret=self.secret, jwt_algorithm="HS256"))
        patcher.start()
        self.addCleanup(patcher.stop)

    def request_with(self, claims, secret=None):
        token = jwt.encode(claims, secret or self.secret, algorithm="HS256")
        return SimpleNamespace(headers={"authorization": f"Bearer {token}"})

    def test_verified_token_yields_user_id(self):
        req = self.request_with({"userId": "64f0c0ffee"})
        self.assertEqual(run_async(deps.get_authenticated_user_id(req)), "64f0c0ffee")

    def test_wrong_secret_is_rejected(self):
        req = self.request_with({"userId": "u1"}, secret="not-the-secret")
        with self.assertRaises(HTTPException) as ctx:
            run_async(deps.get_authenticated_user_id(req))
        self.assertEqual(ctx.exception.status_code, 401)

    def test_expired_token_is_rejected(self):
        req = self.request_with({"userId": "u1", "exp": int(time.time()) - 60})
        with self.assertRaises(HTTPException) as ctx:
            run_async(deps.get_authenticated_user_id(req))
        self.assertEqual(ctx.exception.detail, "Token expired")

    def test_token_without_user_is_rejected(self):
        req = self.request_with({"role": "admin"})
        with self.assertRaises(HTTPException):
            run_async(deps.get_authenticated_user_id(req))

    def test_header_fallback_is_ignored(self):
        req = SimpleNamespace(headers={"x-user-id": "spoofed"})
        with self.assertRaises(HTTPException):
            run_async(deps.get_authenticated_user_id(req))


class TestRequireUser(unittest.TestCase):
    def test_require_user_records_caller_on_request(self):
        req = SimpleNamespace(state=SimpleNamespace())
        ctx = run_async(deps.require_user(req, user_id="u1"))
        self.assertEqual(ctx, {"user_id": "u1"})
        self.assertEqual(req.state.user_id, "u1")


if __name__ == "__main__":
    unittest.main()
