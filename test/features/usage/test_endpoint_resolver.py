import unittest

from features.usage.endpoint_resolver import BIGMODEL_DOMAIN, ZAI_DOMAIN, resolve_domain
from util.errors import UnrecognizedEndpointError


class EndpointResolverTest(unittest.TestCase):

    def test_resolves_zai(self):
        self.assertEqual(resolve_domain("https://api.z.ai/api/anthropic"), ZAI_DOMAIN)

    def test_resolves_open_bigmodel(self):
        self.assertEqual(resolve_domain("https://open.bigmodel.cn/api/anthropic"), BIGMODEL_DOMAIN)

    def test_resolves_dev_bigmodel(self):
        self.assertEqual(resolve_domain("https://dev.bigmodel.cn/api/paas/v4"), BIGMODEL_DOMAIN)

    def test_matches_fragment_anywhere(self):
        self.assertEqual(resolve_domain("api.z.ai"), ZAI_DOMAIN)

    def test_rejects_unknown_domain(self):
        with self.assertRaises(UnrecognizedEndpointError) as context:
            resolve_domain("https://api.example.com/v1")
        self.assertEqual(context.exception.base_url, "https://api.example.com/v1")

    def test_rejects_empty_string(self):
        with self.assertRaises(UnrecognizedEndpointError):
            resolve_domain("")

    def test_rejects_garbage(self):
        for garbage in ["not a url", "💥", "z.ai", "https://bigmodel.cn"]:
            with self.assertRaises(UnrecognizedEndpointError):
                resolve_domain(garbage)

    def test_is_deterministic(self):
        url = "https://open.bigmodel.cn/api/anthropic"
        self.assertEqual(resolve_domain(url), resolve_domain(url))
