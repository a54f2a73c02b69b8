from typing import Type, TypeVar

import requests
from pydantic import BaseModel
from pydantic import ValidationError as PayloadValidationError
from requests import RequestException

from features.usage.model.model_usage_response import ModelUsageResponse
from features.usage.model.quota_limit_response import QuotaLimit, QuotaLimitResponse
from features.usage.model.tool_usage_response import ToolUsageResponse
from features.usage.model.usage_data import ModelUsageResult, ToolUsageItem
from features.usage.time_window import TimeWindow
from features.usage.usage_normalizer import normalize_model_usage, normalize_quota_limits, normalize_tool_usage
from util import log
from util.config import config
from util.errors import HttpStatusError, SchemaError, TransportError
from util.functions import mask_secret

MODEL_USAGE_PATH = "/api/monitor/usage/model-usage"
TOOL_USAGE_PATH = "/api/monitor/usage/tool-usage"
QUOTA_LIMIT_PATH = "/api/monitor/usage/quota/limit"
ACCEPT_LANGUAGE = "en-US,en"
CONTENT_TYPE = "application/json"

P = TypeVar("P", bound = BaseModel)


class UsageFetcher:
    """Single-shot calls against the vendor's usage monitoring API, one GET per operation and no retries"""

    __domain: str
    __auth_token: str

    def __init__(self, domain: str, auth_token: str):
        self.__domain = domain
        self.__auth_token = auth_token

    @property
    def domain(self) -> str:
        return self.__domain

    def fetch_model_usage(self, window: TimeWindow) -> ModelUsageResult:
        raw_body = self.__get(MODEL_USAGE_PATH, "Model usage", window.as_query_params())
        response = self.__parse(ModelUsageResponse, raw_body)
        return normalize_model_usage(response.data)

    def fetch_tool_usage(self, window: TimeWindow) -> list[ToolUsageItem]:
        raw_body = self.__get(TOOL_USAGE_PATH, "Tool usage", window.as_query_params())
        response = self.__parse(ToolUsageResponse, raw_body)
        return normalize_tool_usage(response.data)

    def fetch_quota_limits(self) -> list[QuotaLimit]:
        raw_body = self.__get(QUOTA_LIMIT_PATH, "Quota limits")
        response = self.__parse(QuotaLimitResponse, raw_body)
        return normalize_quota_limits(response.data.limits)

    def __headers(self) -> dict[str, str]:
        return {
            "Authorization": self.__auth_token,
            "Accept-Language": ACCEPT_LANGUAGE,
            "Content-Type": CONTENT_TYPE,
        }

    def __get(self, path: str, label: str, params: dict[str, str] | None = None) -> str:
        url = f"{self.__domain}{path}"
        log.t(f"{label}: GET {url}", f"Params: {params or {}}", f"Token: {mask_secret(self.__auth_token)}")
        try:
            response = requests.get(
                url,
                headers = self.__headers(),
                params = params,
                timeout = config.web_timeout_s,
            )
        except RequestException as e:
            raise TransportError(log.w(f"{label} request failed: {e}")) from e

        raw_body = response.text
        if response.status_code != 200:
            log.w(f"{label} status is not '200': HTTP_{response.status_code}", raw_body)
            raise HttpStatusError(response.status_code, raw_body)

        log.d(f"{label} API response: {raw_body}")
        return raw_body

    @staticmethod
    def __parse(payload_type: Type[P], raw_body: str) -> P:
        try:
            return payload_type.model_validate_json(raw_body)
        except PayloadValidationError as e:
            log.w(f"{payload_type.__name__} has an unexpected shape", raw_body)
            raise SchemaError(str(e), raw_body) from e
