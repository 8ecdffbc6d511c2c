# app/routers/config.py
"""
公共配置 API
提供前端需要的配置信息，实现前后端配置同步
"""
from fastapi import APIRouter

from app.enums import CEFRLevel
from app.schemas import PublicConfigResponse, ConfigLimits
from app.config import (
    API_VERSION,
    QUERY_MAX_LIMIT,
    CEFR_DEFAULT_PAGE_SIZE,
)

router = APIRouter(prefix="/config", tags=["Config"])


@router.get("", response_model=PublicConfigResponse)
def get_public_config():
    """
    获取公共配置（供前端使用）

    **返回内容**：
    - `version`: API 版本号
    - `limits`: 查询条数限制与默认分页大小
    - `cefr_levels`: 支持的 CEFR 等级（从低到高）

    **示例响应**：
    ```json
    {
      "version": "1.0.0",
      "limits": {
        "query_max_limit": 500,
        "cefr_default_page_size": 10
      },
      "cefr_levels": ["A1", "A2", "B1", "B2", "C1", "C2"]
    }
    ```
    """
    return PublicConfigResponse(
        version=API_VERSION,
        limits=ConfigLimits(
            query_max_limit=QUERY_MAX_LIMIT,
            cefr_default_page_size=CEFR_DEFAULT_PAGE_SIZE,
        ),
        cefr_levels=[level.value for level in CEFRLevel],
    )
