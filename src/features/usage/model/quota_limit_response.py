from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class UsageDetail(BaseModel):
    model_config = ConfigDict(populate_by_name = True)

    tool_name: str = Field(validation_alias = AliasChoices("modelCode", "tool_name"))
    usage: int


class QuotaLimit(BaseModel):
    model_config = ConfigDict(populate_by_name = True)

    type_label: str = Field(alias = "type")
    unit: int
    number: int
    usage: int | None = None
    current_value: int | None = Field(default = None, alias = "currentValue")
    remaining: int | None = None
    percentage: float
    usage_details: list[UsageDetail] | None = Field(default = None, alias = "usageDetails")
    next_reset_time: int | None = Field(default = None, alias = "nextResetTime")  # epoch millis


class QuotaLimitData(BaseModel):
    limits: list[QuotaLimit]


class QuotaLimitResponse(BaseModel):
    code: int
    msg: str | None = None
    data: QuotaLimitData
    success: bool
