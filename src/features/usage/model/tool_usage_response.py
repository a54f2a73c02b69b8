from pydantic import BaseModel, ConfigDict, Field


class ToolDetail(BaseModel):
    model_config = ConfigDict(populate_by_name = True, protected_namespaces = ())

    model_name: str = Field(alias = "modelName")
    total_usage_count: int = Field(alias = "totalUsageCount")


class ToolTotalUsage(BaseModel):
    model_config = ConfigDict(populate_by_name = True, extra = "allow")

    total_network_search_count: int = Field(alias = "totalNetworkSearchCount")
    total_web_read_mcp_count: int = Field(alias = "totalWebReadMcpCount")
    total_zread_mcp_count: int = Field(alias = "totalZreadMcpCount")
    total_search_mcp_count: int = Field(alias = "totalSearchMcpCount")
    tool_details: list[ToolDetail] = Field(alias = "toolDetails")


class ToolUsageData(BaseModel):
    # keeps x_time and the other top-level counters the monitor doesn't surface
    model_config = ConfigDict(populate_by_name = True, extra = "allow")

    total_usage: ToolTotalUsage = Field(alias = "totalUsage")


class ToolUsageResponse(BaseModel):
    code: int
    msg: str | None = None
    data: ToolUsageData
    success: bool
