# app/routers/cefr.py
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.config import CEFR_DEFAULT_PAGE_SIZE, CEFR_MAX_PAGE, QUERY_MAX_LIMIT
from app.database import get_db
from app.schemas import CEFRLevelPage, CEFRWordsResponse
from app.services.cefr_service import CEFRService

router = APIRouter(tags=["CEFR"])


# ================= 依赖注入 =================
def get_cefr_service(db: Session = Depends(get_db)) -> CEFRService:
    """
    依赖注入：将 DB Session 注入 Service
    """
    return CEFRService(db)


# ================= 等级词表接口 =================
@router.get("/cefr", response_model=CEFRLevelPage)
def get_words_by_level(
    level: str = Query(..., min_length=1, description="CEFR 等级，如 A1"),
    page: int = Query(1, ge=1, le=CEFR_MAX_PAGE, description="页码（从 1 开始）"),
    page_size: int = Query(CEFR_DEFAULT_PAGE_SIZE, ge=1, le=QUERY_MAX_LIMIT, alias="pageSize"),
    cefr_service: CEFRService = Depends(get_cefr_service)
):
    """
    按等级分页获取单词（按字母排序）

    **查询参数**:
    - level: CEFR 等级（大小写不敏感），只接受 A1, A2, B1, B2, C1, C2；
      库中存在的其他等级（如 A0、pre-A1）会返回 400
    - page: 页码，默认 1，最大 CEFR_MAX_PAGE（默认 100000）
    - pageSize: 每页条数，默认 10

    **说明**:
    - 该等级下没有单词时返回 404
    - 页码超出范围时返回空的 words 列表

    **示例响应**:
    ```json
    {
      "level": "A1",
      "words": [{"word": "cat", "voice": "cat.mp3", "phonetics": "/kæt/"}],
      "totalWords": 1,
      "page": 1,
      "pageSize": 10,
      "totalPages": 1
    }
    ```
    """
    return cefr_service.get_words_by_level(level, page, page_size)


@router.get("/cefr-words", response_model=CEFRWordsResponse)
def get_words_by_levels(
    levels: str = Query(..., description="逗号分隔的等级，如 A1,B2"),
    limit: Optional[int] = Query(None, description="正整数时限制返回条数"),
    cefr_service: CEFRService = Depends(get_cefr_service)
):
    """
    多等级随机词表（只包含有发音的词，随机顺序）

    **查询参数**:
    - levels: 必填，逗号分隔
    - levels 中的每个等级同样只接受 A1..C2
    - limit: 可选，不传、非正数或超出数据库整数范围时返回全部

    **示例**:
    - GET /cefr-words?levels=A1,A2&limit=20
    """
    return cefr_service.get_words_by_levels(levels, limit)
