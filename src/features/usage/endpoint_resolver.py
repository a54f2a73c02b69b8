from util.errors import UnrecognizedEndpointError

ZAI_DOMAIN = "https://api.z.ai"
BIGMODEL_DOMAIN = "https://open.bigmodel.cn"

# first matching fragment wins
KNOWN_DOMAINS: list[tuple[str, str]] = [
    ("api.z.ai", ZAI_DOMAIN),
    ("open.bigmodel.cn", BIGMODEL_DOMAIN),
    ("dev.bigmodel.cn", BIGMODEL_DOMAIN),
]


def resolve_domain(base_url: str) -> str:
    """
    Maps the configured base URL onto the canonical domain of the usage API.

    Parameters:
    base_url (str): The base URL from the monitor configuration, e.g. 'https://api.z.ai/api/anthropic'.

    Returns:
    str: The scheme and host of the matching usage API.

    Raises:
    UnrecognizedEndpointError: If the URL contains none of the known domain fragments.
    """
    for fragment, domain in KNOWN_DOMAINS:
        if fragment in (base_url or ""):
            return domain
    raise UnrecognizedEndpointError(base_url)
