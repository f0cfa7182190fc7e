import unittest
from unittest.mock import Mock, patch

import requests
from fastapi.testclient import TestClient

from app.core.errors import CollaboratorUnavailable
from app.dependencies.providers import breach_provider
from app.main import app
from app.services.breach.base import BreachProvider
from app.services.password_checker import (
    PasswordAssessment,
    fingerprint,
    score_strength,
    split_fingerprint,
)


class StaticProvider(BreachProvider):

    def __init__(self, counts=None, error=None):
        self.counts = counts or {}
        self.error = error
        self.prefixes = []

    def range_counts(self, prefix):
        self.prefixes.append(prefix)
        if self.error:
            raise self.error
        return self.counts


class RouteTestCase(unittest.TestCase):

    def setUp(self):
        self.client = TestClient(app)

    def tearDown(self):
        app.dependency_overrides.clear()

    def use_provider(self, provider):
        app.dependency_overrides[breach_provider] = lambda: provider


class TestPasswordRoute(RouteTestCase):

    def test_breached_password(self):
        _, suffix = split_fingerprint(fingerprint("password"))
        self.use_provider(StaticProvider({suffix: 3861493}))

        resp = self.client.post("/api/security/check-password", json={"password": "password"})

        self.assertEqual(resp.status_code, 200)
        body = resp.json()
        self.assertTrue(body["success"])
        self.assertTrue(body["pwned"])
        self.assertEqual(body["breachCount"], 3861493)
        self.assertEqual(body["maxScore"], 8)
        self.assertEqual(body["length"], 8)
        self.assertFalse(body["hasUppercase"])
        self.assertTrue(body["hasLowercase"])
        self.assertLessEqual(len(body["suggestions"]), 4)
        self.assertEqual(body["source"], "Have I Been Pwned API")
        self.assertIn("timestamp", body)
        self.assertIn("note", body)

    def test_strong_password(self):
        self.use_provider(StaticProvider())

        resp = self.client.post("/api/security/check-password", json={"password": "Abcdefgh12345!xy"})

        body = resp.json()
        self.assertFalse(body["pwned"])
        self.assertEqual(body["breachCount"], 0)
        self.assertEqual(body["score"], 8)
        self.assertEqual(body["strength"], "Very Strong")
        self.assertEqual(body["suggestions"], [])

    def test_missing_password(self):
        resp = self.client.post("/api/security/check-password", json={})
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json(), {"success": False, "error": "Password is required"})

    def test_non_string_password(self):
        resp = self.client.post("/api/security/check-password", json={"password": 12345678})
        self.assertEqual(resp.status_code, 400)
        self.assertFalse(resp.json()["success"])

    def test_empty_body(self):
        resp = self.client.post("/api/security/check-password")
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json(), {"success": False, "error": "Password is required"})

    def test_lone_surrogate_password(self):
        provider = StaticProvider()
        self.use_provider(provider)

        resp = self.client.post(
            "/api/security/check-password",
            content='{"password": "abc\\ud800def"}',
            headers={"Content-Type": "application/json"},
        )

        self.assertEqual(resp.status_code, 200)
        body = resp.json()
        self.assertTrue(body["success"])
        self.assertEqual(body["length"], 7)
        expected_prefix, _ = split_fingerprint(fingerprint("abc\ufffddef"))
        self.assertEqual(provider.prefixes, [expected_prefix])

    @patch('app.routes.security.check_password')
    def test_degraded_result_omits_strength_details(self, mock_check):
        mock_check.return_value = PasswordAssessment(
            pwned=False,
            breach_count=0,
            strength="Weak",
            score=2,
            length=5,
            source="Fallback Check",
            note="Breach lookup unavailable - using fallback check",
            degraded=True,
            strength_report=score_strength("short"),
        )

        body = self.client.post("/api/security/check-password", json={"password": "short"}).json()

        self.assertEqual(body["source"], "Fallback Check")
        for key in ["maxScore", "length", "hasUppercase", "suggestions"]:
            self.assertNotIn(key, body)

    def test_body_not_an_object(self):
        resp = self.client.post("/api/security/check-password", json=["password"])
        self.assertEqual(resp.status_code, 400)
        self.assertFalse(resp.json()["success"])

    def test_collaborator_failure_falls_back(self):
        self.use_provider(StaticProvider(error=CollaboratorUnavailable("down")))

        resp = self.client.post("/api/security/check-password", json={"password": "admin"})

        self.assertEqual(resp.status_code, 200)
        body = resp.json()
        self.assertTrue(body["success"])
        self.assertEqual(body["source"], "Fallback Check")
        self.assertTrue(body["pwned"])
        self.assertEqual(body["score"], 2)
        self.assertNotIn("suggestions", body)

    @patch('app.services.breach.hibp_provider.requests.get')
    def test_timeout_through_real_provider(self, mock_get):
        mock_get.side_effect = requests.Timeout("timed out")

        resp = self.client.post("/api/security/check-password", json={"password": "Tr0ub4dor&3"})

        self.assertEqual(resp.status_code, 200)
        body = resp.json()
        self.assertTrue(body["success"])
        self.assertEqual(body["source"], "Fallback Check")
        self.assertEqual(mock_get.call_args[1]["timeout"], 10)

    @patch('app.services.breach.hibp_provider.requests.get')
    def test_real_provider_match(self, mock_get):
        prefix, suffix = split_fingerprint(fingerprint("letmein"))
        mock_response = Mock()
        mock_response.status_code = 200
        mock_response.text = f"00000000000000000000000000000000000:1\n{suffix}:1234\n"
        mock_get.return_value = mock_response

        resp = self.client.post("/api/security/check-password", json={"password": "letmein"})

        body = resp.json()
        self.assertTrue(body["pwned"])
        self.assertEqual(body["breachCount"], 1234)
        self.assertTrue(mock_get.call_args[0][0].endswith("/" + prefix))


class TestEmailRoute(RouteTestCase):

    def test_known_safe(self):
        resp = self.client.post("/api/security/check-email", json={"email": "deepakkumar181309@gmail.com"})
        body = resp.json()
        self.assertEqual(resp.status_code, 200)
        self.assertFalse(body["breached"])
        self.assertEqual(body["breaches"], [])
        self.assertEqual(body["count"], 0)
        self.assertEqual(body["confidence"], "100% (user verified)")

    def test_common_breached(self):
        resp = self.client.post("/api/security/check-email", json={"email": "test@gmail.com"})
        body = resp.json()
        self.assertTrue(body["breached"])
        self.assertEqual(body["count"], 1)
        self.assertEqual(body["confidence"], "High")
        self.assertEqual(body["breaches"][0]["date"], "2022-06-20")

    def test_safe_pattern(self):
        resp = self.client.post("/api/security/check-email", json={"email": "zzzzzzzzzzzz@gmail.com"})
        body = resp.json()
        self.assertFalse(body["breached"])
        self.assertEqual(body["confidence"], "Medium")
        self.assertNotIn("analysis", body)

    def test_default(self):
        resp = self.client.post("/api/security/check-email", json={"email": "random42@unknown.org"})
        body = resp.json()
        self.assertFalse(body["breached"])
        self.assertEqual(body["confidence"], "Low")
        self.assertEqual(body["analysis"]["domain"], "unknown.org")

    def test_not_an_email(self):
        resp = self.client.post("/api/security/check-email", json={"email": "not-an-email"})
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json(), {"success": False, "error": "Valid email address is required"})

    def test_empty_body(self):
        resp = self.client.post("/api/security/check-email")
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["error"], "Valid email address is required")

    def test_lone_surrogate_email(self):
        resp = self.client.post(
            "/api/security/check-email",
            content='{"email": "a\\ud800@unknown.org"}',
            headers={"Content-Type": "application/json"},
        )

        self.assertEqual(resp.status_code, 200)
        body = resp.json()
        self.assertTrue(body["success"])
        self.assertEqual(body["email"], "a\ufffd@unknown.org")
        self.assertEqual(body["confidence"], "Low")

    def test_missing_email(self):
        resp = self.client.post("/api/security/check-email", json={})
        self.assertEqual(resp.status_code, 400)

    @patch('app.services.email_checker.classify_email', side_effect=KeyError("rules"))
    def test_internal_error_fails_open(self, _):
        resp = self.client.post("/api/security/check-email", json={"email": "someone@example.org"})
        self.assertEqual(resp.status_code, 200)
        body = resp.json()
        self.assertTrue(body["success"])
        self.assertFalse(body["breached"])
        self.assertEqual(body["confidence"], "Unknown")
        self.assertEqual(body["source"], "Error Fallback")


class TestStaticRoutes(RouteTestCase):

    def test_scan_domain(self):
        resp = self.client.post("/api/security/scan-domain", json={"domain": "example.com"})
        body = resp.json()
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(body["domain"], "example.com")
        self.assertEqual(body["reputation"], "Clean")
        self.assertEqual(body["malicious"], 0)
        self.assertEqual(body["harmless"], 65)

    def test_scan_domain_missing(self):
        resp = self.client.post("/api/security/scan-domain", json={})
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["error"], "Domain is required")

    def test_scan_domain_empty_body(self):
        resp = self.client.post("/api/security/scan-domain")
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["error"], "Domain is required")

    def test_scan_domain_lone_surrogate(self):
        resp = self.client.post(
            "/api/security/scan-domain",
            content='{"domain": "exa\\udc00mple.com"}',
            headers={"Content-Type": "application/json"},
        )
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["domain"], "exa\ufffdmple.com")

    @patch('app.routes.intel.domain_reputation', side_effect=RuntimeError("boom"))
    def test_scan_domain_failure(self, _):
        resp = self.client.post("/api/security/scan-domain", json={"domain": "example.com"})
        self.assertEqual(resp.status_code, 500)
        self.assertEqual(resp.json(), {"success": False, "error": "Domain scan failed"})

    def test_my_ip(self):
        body = self.client.get("/api/security/my-ip").json()
        self.assertEqual(body["ip"], "8.8.8.8")
        self.assertEqual(body["country"], "United States")

    def test_news_and_usage(self):
        self.assertEqual(self.client.get("/api/security/security-news").json()["stories"], [])
        self.assertEqual(self.client.get("/api/security/api-usage").json()["usage"], {})

    def test_health(self):
        resp = self.client.get("/api/health")
        body = resp.json()
        self.assertEqual(body["status"], "OK")
        self.assertIn("version", body)
        self.assertIn("Real HIBP Password Checking", body["features"])
        self.assertIn("X-Request-ID", resp.headers)
        self.assertEqual(resp.headers["X-Content-Type-Options"], "nosniff")

    def test_root(self):
        body = self.client.get("/").json()
        self.assertEqual(body["endpoints"]["password"], "POST /api/security/check-password")


if __name__ == '__main__':
    unittest.main()
