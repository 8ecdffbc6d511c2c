# app/services/cefr_service.py
import logging
import math
from typing import List, Optional

from fastapi import HTTPException, status
from sqlalchemy import distinct, func
from sqlalchemy.orm import Session

from app.enums import CEFRLevel
from app.models import Word, WordInfo, CEFR
from app.schemas import CEFRLevelPage, CEFRWordItem, CEFRWordDefinition, CEFRWordsResponse

logger = logging.getLogger(__name__)

# 数据库 LIMIT 能绑定的最大整数 (64 位有符号)
SQL_MAX_INT = 2 ** 63 - 1


def parse_level(level: str) -> str:
    """
    规范化并校验单个 CEFR 等级（大小写不敏感）

    Raises:
        HTTPException(400): 非法等级
    """
    normalized = level.strip().upper()
    try:
        return CEFRLevel(normalized).value
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid CEFR level: {level}"
        )


def parse_levels(levels: str) -> List[str]:
    """
    解析逗号分隔的等级列表：去空白、转大写、去重（保持顺序）

    Raises:
        HTTPException(400): 列表为空或包含非法等级
    """
    parsed: List[str] = []
    for part in levels.split(","):
        if not part.strip():
            continue
        level = parse_level(part)
        if level not in parsed:
            parsed.append(level)

    if not parsed:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Query parameter 'levels' is required"
        )
    return parsed


class CEFRService:
    def __init__(self, db: Session):
        self.db = db

    def get_words_by_level(self, level: str, page: int, page_size: int) -> CEFRLevelPage:
        """
        按单个等级分页列出单词（按字母排序）

        Args:
            level: CEFR 等级
            page: 页码（从 1 开始）
            page_size: 每页条数

        Returns:
            CEFRLevelPage: 超出最后一页时 words 为空列表

        Raises:
            HTTPException(400): 非法等级
            HTTPException(404): 该等级下没有任何单词
        """
        level = parse_level(level)
        level_filter = func.upper(CEFR.level) == level

        # 1. 统计总数
        total_words = (
            self.db.query(func.count(distinct(Word.id)))
            .select_from(Word)
            .join(CEFR, CEFR.word_id == Word.id)
            .filter(level_filter)
            .scalar()
        ) or 0

        if total_words == 0:
            logger.info(f"No words found for CEFR level: {level}")
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"No words found for CEFR level: {level}"
            )

        # 2. 查询当前页
        rows = (
            self.db.query(
                Word.word.label("word"),
                CEFR.voice.label("voice"),
                CEFR.phonetics.label("phonetics"),
            )
            .select_from(Word)
            .join(CEFR, CEFR.word_id == Word.id)
            .filter(level_filter)
            .distinct()
            .order_by(Word.word)
            .offset((page - 1) * page_size)
            .limit(page_size)
            .all()
        )

        return CEFRLevelPage(
            level=level,
            words=[CEFRWordItem(word=r.word, voice=r.voice, phonetics=r.phonetics) for r in rows],
            total_words=total_words,
            page=page,
            page_size=page_size,
            total_pages=math.ceil(total_words / page_size),
        )

    def get_words_by_levels(self, levels: str, limit: Optional[int] = None) -> CEFRWordsResponse:
        """
        多个等级的随机单词列表（只包含有发音的词）

        Args:
            levels: 逗号分隔的等级，如 "A1,B2"
            limit: 正整数时限制返回条数，否则返回全部；
                大于 SQL_MAX_INT 的值必然超过结果数，同样返回全部

        Raises:
            HTTPException(400): levels 为空或包含非法等级
        """
        parsed = parse_levels(levels)

        # DISTINCT 放在子查询里，外层再随机排序（PostgreSQL 不允许 DISTINCT + 非选择列排序）
        distinct_rows = (
            self.db.query(
                Word.word.label("word"),
                WordInfo.definition.label("definition"),
                CEFR.voice.label("voice"),
                CEFR.phonetics.label("phonetics"),
            )
            .select_from(Word)
            .join(CEFR, CEFR.word_id == Word.id)
            .join(WordInfo, WordInfo.word_id == Word.id)
            .filter(func.upper(CEFR.level).in_(parsed), CEFR.voice.isnot(None))
            .distinct()
            .subquery()
        )

        query = self.db.query(
            distinct_rows.c.word,
            distinct_rows.c.definition,
            distinct_rows.c.voice,
            distinct_rows.c.phonetics,
        ).order_by(func.random())
        if limit is not None and 0 < limit <= SQL_MAX_INT:
            query = query.limit(limit)

        rows = query.all()
        logger.debug(f"Found {len(rows)} words for CEFR levels: {parsed}")

        return CEFRWordsResponse(
            levels=parsed,
            words=[
                CEFRWordDefinition(
                    word=r.word,
                    definition=r.definition,
                    voice=r.voice,
                    phonetics=r.phonetics,
                )
                for r in rows
            ],
        )
