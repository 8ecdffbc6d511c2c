# app/routers/dictionary.py
from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.config import QUERY_MAX_LIMIT
from app.database import get_db
from app.schemas import WordDetail
from app.services.dictionary_service import DictionaryService

router = APIRouter(tags=["Dictionary"])


# ================= 依赖注入 =================
def get_dictionary_service(db: Session = Depends(get_db)) -> DictionaryService:
    """
    依赖注入：将 DB Session 注入 Service
    """
    return DictionaryService(db)


# ================= 查询接口 =================
@router.get("/wordInfo/{word}", response_model=WordDetail)
def get_word_info(
    word: str,
    dictionary_service: DictionaryService = Depends(get_dictionary_service)
):
    """
    获取单词详情

    **路径参数**:
    - word: 要查询的单词（精确匹配，大小写不敏感）

    **返回结果**:
    - pos: 去重后的词性 + 释义列表
    - examples: 去重后的例句列表（没有时为空列表）
    - cefr: CEFR 等级、音标、发音（没有时为 null）

    **示例**:
    - GET /wordInfo/cat
    """
    return dictionary_service.get_word_details(word)


@router.get("/recommendations/{word}", response_model=List[str])
def get_recommendations(
    word: str,
    limit: Optional[int] = Query(None, ge=1, le=QUERY_MAX_LIMIT, description="最多返回条数"),
    sort: bool = Query(False, description="是否按字母排序"),
    dictionary_service: DictionaryService = Depends(get_dictionary_service)
):
    """
    单词联想（前缀匹配）

    **路径参数**:
    - word: 单词前缀（大小写不敏感）

    没有匹配时返回 404
    """
    return dictionary_service.get_recommendations(word, limit=limit, sort=sort)


@router.get("/random", response_model=WordDetail)
def get_random_word(
    dictionary_service: DictionaryService = Depends(get_dictionary_service)
):
    """
    随机单词

    只从同时拥有释义和 CEFR 信息的单词中抽取
    """
    return dictionary_service.get_random_word()


@router.get("/wordOftheDay", response_model=WordDetail)
def get_word_of_the_day(
    day: Optional[date] = Query(None, alias="date", description="日期 (YYYY-MM-DD)，默认今天"),
    dictionary_service: DictionaryService = Depends(get_dictionary_service)
):
    """
    每日一词

    同一天总是返回同一个词；候选词按周期循环

    **示例**:
    - GET /wordOftheDay
    - GET /wordOftheDay?date=2024-03-15
    """
    return dictionary_service.get_word_of_the_day(day)
