# app/services/dictionary_service.py
import logging
from datetime import date
from typing import List, Optional

from fastapi import HTTPException, status
from sqlalchemy import func
from sqlalchemy.orm import Session, Query

from app.models import Word, WordInfo, Example, CEFR
from app.schemas import WordDetail
from app.utils.word_assembler import assemble_word_detail
from app.utils.word_of_the_day import word_of_the_day_rank
from app.config import WORD_OF_THE_DAY_EPOCH, WORD_OF_THE_DAY_MIN_LENGTH

logger = logging.getLogger(__name__)

LIKE_ESCAPE = "\\"


def escape_like(value: str) -> str:
    """转义 LIKE 通配符，使前缀只按字面匹配"""
    return (
        value.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )


def _normalize(word: str) -> str:
    """去除首尾空白并转小写；空字符串视为参数错误"""
    normalized = word.strip().lower()
    if not normalized:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Word must not be empty"
        )
    return normalized


class DictionaryService:
    """
    英语词典查询服务

    所有查询都是只读的：前缀联想、词条详情、随机词、每日一词。
    """

    def __init__(self, db: Session):
        self.db = db

    # ==================== 查询构建 ====================
    def _detail_rows_query(self) -> Query:
        """
        词条详情的扁平查询：Words LEFT JOIN WordInfo / CEFR / Examples

        每个 (WordInfo, Example) 组合产生一行，由 word_assembler 负责去重
        """
        return (
            self.db.query(
                Word.word.label("word"),
                WordInfo.part_of_speech.label("part_of_speech"),
                WordInfo.definition.label("definition"),
                CEFR.level.label("level"),
                CEFR.phonetics.label("phonetics"),
                CEFR.voice.label("voice"),
                Example.example.label("example"),
            )
            .select_from(Word)
            .outerjoin(WordInfo, WordInfo.word_id == Word.id)
            .outerjoin(CEFR, CEFR.word_id == Word.id)
            .outerjoin(Example, Example.word_id == Word.id)
            .order_by(WordInfo.id, Example.id)
        )

    def _eligible_words_query(self) -> Query:
        """同时拥有 WordInfo 与 CEFR 的词（随机词 / 每日一词的候选池）"""
        return self.db.query(Word.id).filter(Word.infos.any(), Word.cefr.has())

    def _get_details_by_id(self, word_id: int) -> Optional[WordDetail]:
        rows = self._detail_rows_query().filter(Word.id == word_id).all()
        return assemble_word_detail(rows)

    # ==================== 对外接口 ====================
    def get_recommendations(self, prefix: str, limit: Optional[int] = None, sort: bool = False) -> List[str]:
        """
        前缀联想

        Args:
            prefix: 单词前缀（大小写不敏感）
            limit: 最多返回的条数，None 表示全部
            sort: 是否按字母排序（默认使用数据库顺序）

        Returns:
            List[str]: 以 prefix 开头的单词列表

        Raises:
            HTTPException(404): 没有匹配的单词
        """
        normalized = _normalize(prefix)
        query = self.db.query(Word.word.label("word")).filter(
            func.lower(Word.word).like(f"{escape_like(normalized)}%", escape=LIKE_ESCAPE)
        )
        if sort:
            query = query.order_by(Word.word)
        if limit:
            query = query.limit(limit)

        words = [row.word for row in query.all()]
        if not words:
            logger.info(f"No recommendations for prefix: {normalized}")
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"No recommendations found for: {normalized}"
            )

        logger.debug(f"Found {len(words)} recommendations for prefix: {normalized}")
        return words

    def get_word_details(self, word: str) -> WordDetail:
        """
        获取单词详情（精确匹配，大小写不敏感）

        Raises:
            HTTPException(404): 单词不存在
        """
        normalized = _normalize(word)
        rows = self._detail_rows_query().filter(func.lower(Word.word) == normalized).all()
        details = assemble_word_detail(rows)
        if details is None:
            logger.info(f"Word not found: {normalized}")
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"Word not found: {normalized}"
            )
        return details

    def get_random_word(self) -> WordDetail:
        """
        从候选池中等概率随机选一个词

        Raises:
            HTTPException(404): 候选池为空
        """
        word_id = self._eligible_words_query().order_by(func.random()).limit(1).scalar()
        details = self._get_details_by_id(word_id) if word_id is not None else None
        if details is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Unable to generate random word"
            )
        return details

    def get_word_of_the_day(self, day: Optional[date] = None) -> WordDetail:
        """
        每日一词

        候选: 长度 > WORD_OF_THE_DAY_MIN_LENGTH 且同时拥有 WordInfo 与 CEFR 的词，
        按长度升序（同长度按 id）排列，取第 rank 个:
        rank = (day - WORD_OF_THE_DAY_EPOCH).days mod 候选数 + 1

        Args:
            day: 目标日期，默认今天

        Raises:
            HTTPException(404): 没有候选词
        """
        day = day or date.today()
        candidates = self._eligible_words_query().filter(
            func.length(Word.word) > WORD_OF_THE_DAY_MIN_LENGTH
        )

        candidate_count = candidates.count()
        if candidate_count == 0:
            logger.info("No candidates for word of the day")
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="No word of the day available"
            )

        rank = word_of_the_day_rank(day, candidate_count, WORD_OF_THE_DAY_EPOCH)
        word_id = (
            candidates.order_by(func.length(Word.word), Word.id)
            .offset(rank - 1)
            .limit(1)
            .scalar()
        )
        logger.debug(f"Word of the day for {day}: rank={rank}/{candidate_count}, word_id={word_id}")

        details = self._get_details_by_id(word_id) if word_id is not None else None
        if details is None:
            # 两次查询之间候选池被修改
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="No word of the day available"
            )
        return details

