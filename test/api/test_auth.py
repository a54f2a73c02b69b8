import unittest
from unittest.mock import MagicMock, patch

from fastapi import HTTPException
from pydantic import SecretStr
from starlette.status import HTTP_403_FORBIDDEN

from api.auth import verify_api_key


class AuthTest(unittest.TestCase):

    @patch("api.auth.config")
    def test_open_when_no_api_key_configured(self, mock_config: MagicMock):
        mock_config.api_key = SecretStr("")
        # noinspection PyTypeChecker
        self.assertIsNone(verify_api_key(None))
        self.assertEqual(verify_api_key("anything"), "anything")

    @patch("api.auth.config")
    def test_missing_api_key(self, mock_config: MagicMock):
        mock_config.api_key = SecretStr("VALI-DKEY")
        with self.assertRaises(HTTPException) as context:
            # noinspection PyTypeChecker
            verify_api_key(None)
        self.assertEqual(context.exception.status_code, HTTP_403_FORBIDDEN)
        self.assertEqual(context.exception.detail, "Could not validate the API key")

    @patch("api.auth.config")
    def test_invalid_api_key(self, mock_config: MagicMock):
        mock_config.api_key = SecretStr("VALI-DKEY")
        with self.assertRaises(HTTPException) as context:
            verify_api_key("NOTA-VALI-DKEY")
        self.assertEqual(context.exception.status_code, HTTP_403_FORBIDDEN)

    @patch("api.auth.config")
    def test_valid_api_key(self, mock_config: MagicMock):
        mock_config.api_key = SecretStr("VALI-DKEY")
        self.assertEqual(verify_api_key("VALI-DKEY"), "VALI-DKEY")
