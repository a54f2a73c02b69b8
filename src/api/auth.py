from fastapi import HTTPException, Security
from fastapi.security import APIKeyHeader
from starlette.status import HTTP_403_FORBIDDEN

from util import log
from util.config import config

api_key_header = APIKeyHeader(name = "X-API-Key", auto_error = False)


def verify_api_key(api_key: str | None = Security(api_key_header)) -> str | None:
    # an empty API key in the service config leaves the local API open
    expected = config.api_key.get_secret_value()
    if not expected:
        return api_key
    if api_key != expected:
        log.w("Rejected a request with an invalid API key")
        raise HTTPException(status_code = HTTP_403_FORBIDDEN, detail = "Could not validate the API key")
    return api_key
