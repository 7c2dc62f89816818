import json
import tempfile
import unittest
from pathlib import Path
from unittest.mock import Mock, patch

from gdrivebrowser.auth import OAuthClient, credentials_from_token
from gdrivebrowser.errors import AuthError, SessionError
from gdrivebrowser.session import SessionContext

SCOPES = ["https://www.googleapis.com/auth/drive"]


class TestOAuthClient(unittest.TestCase):
    def test_get_credentials_loads_token_file_without_refresh(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            tmp_path = Path(tmp)
            token_file = tmp_path / "token.json"
            token_file.write_text(
                json.dumps(
                    {
                        "token": "fake-token",
                        "refresh_token": "fake-refresh-token",
                        "token_uri": "https://oauth2.googleapis.com/token",
                        "client_id": "fake-client-id",
                        "client_secret": "fake-client-secret",
                        "scopes": SCOPES,
                        "type": "authorized_user",
                    }
                ),
                encoding="utf-8",
            )

            client = OAuthClient(str(tmp_path / "client_secrets.json"), str(token_file))
            creds = client.get_credentials(scopes=SCOPES, ensure_valid=False)

            self.assertEqual(creds.refresh_token, "fake-refresh-token")

    def test_rejects_empty_paths(self) -> None:
        with self.assertRaises(ValueError):
            OAuthClient("", "token.json")

    def test_sign_in_records_drive_account(self) -> None:
        creds = Mock()
        creds.token = "access-token"
        controller = Mock()
        controller.about_user.return_value = {
            "permissionId": "P123",
            "emailAddress": "me@example.com",
        }
        session = SessionContext()
        client = OAuthClient("secrets.json", "token.json")

        with patch.object(OAuthClient, "get_credentials", return_value=creds), patch(
            "gdrivebrowser.controller.GoogleDriveController", return_value=controller
        ):
            user = client.sign_in(session)

        self.assertEqual((user.user_id, user.token, user.email), ("P123", "access-token", "me@example.com"))
        self.assertIs(session.user, user)

    def test_sign_in_without_account_id_fails(self) -> None:
        controller = Mock()
        controller.about_user.return_value = {}
        client = OAuthClient("secrets.json", "token.json")

        with patch.object(OAuthClient, "get_credentials", return_value=Mock()), patch(
            "gdrivebrowser.controller.GoogleDriveController", return_value=controller
        ):
            with self.assertRaises(AuthError):
                client.sign_in(SessionContext())


class TestCredentialsFromToken(unittest.TestCase):
    def test_wraps_bearer_token(self) -> None:
        creds = credentials_from_token("abc")
        self.assertEqual(creds.token, "abc")

    def test_empty_token(self) -> None:
        with self.assertRaises(SessionError):
            credentials_from_token(" ")


if __name__ == "__main__":
    unittest.main()
