import unittest

from pydantic import SecretStr

from util.functions import first_matching, mask_secret


class FunctionsTest(unittest.TestCase):

    def test_first_matching_returns_first_hit(self):
        self.assertEqual(first_matching(["alpha", "beta", "better"], lambda it: it.startswith("be")), "beta")

    def test_first_matching_returns_none_without_hit(self):
        self.assertIsNone(first_matching(["alpha"], lambda it: it.startswith("z")))

    def test_first_matching_returns_none_for_empty_source(self):
        self.assertIsNone(first_matching([], lambda it: True))

    def test_mask_secret_none(self):
        self.assertIsNone(mask_secret(None))

    def test_mask_secret_short(self):
        self.assertEqual(mask_secret("abcd"), "****")

    def test_mask_secret_medium(self):
        self.assertEqual(mask_secret("abcdefgh"), "a******h")

    def test_mask_secret_long(self):
        self.assertEqual(mask_secret("abcdefghijkl"), "abc*****jkl")

    def test_mask_secret_secret_str(self):
        self.assertEqual(mask_secret(SecretStr("abcdefghijkl")), "abc*****jkl")

    def test_mask_secret_custom_mask(self):
        self.assertEqual(mask_secret("abcd", mask = "#"), "####")
