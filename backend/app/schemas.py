# app/schemas.py
from pydantic import BaseModel, Field
from typing import List, Optional

# 所有词条类接口（/wordInfo, /random, /wordOftheDay）统一使用小写的 pos / cefr 字段，
# cefr 缺失时返回 null，不省略字段

# ==================== 词条相关 ====================
class PartOfSpeechEntry(BaseModel):
    """词性 + 释义"""
    pos: str = Field(..., description="词性")
    definition: str = Field(..., description="释义")


class CEFRInfo(BaseModel):
    """CEFR 等级信息"""
    level: str = Field(..., description="CEFR 等级 (A1..C2)")
    phonetics: Optional[str] = Field(None, description="音标")
    voice: Optional[str] = Field(None, description="发音音频引用")


class WordDetail(BaseModel):
    """词条详情响应"""
    word: str
    pos: List[PartOfSpeechEntry] = Field(default_factory=list, description="去重后的词性释义列表")
    examples: List[str] = Field(default_factory=list, description="去重后的例句列表")
    cefr: Optional[CEFRInfo] = Field(None, description="CEFR 信息，没有时为 null")


# ==================== CEFR 列表相关 ====================
class CEFRWordItem(BaseModel):
    """单等级列表中的词"""
    word: str
    voice: Optional[str] = None
    phonetics: Optional[str] = None


class CEFRLevelPage(BaseModel):
    """单等级分页响应"""
    level: str
    words: List[CEFRWordItem] = Field(default_factory=list)
    total_words: int = Field(..., alias="totalWords")
    page: int
    page_size: int = Field(..., alias="pageSize")
    total_pages: int = Field(..., alias="totalPages")

    class Config:
        populate_by_name = True


class CEFRWordDefinition(BaseModel):
    """多等级列表中的词（带释义）"""
    word: str
    definition: str
    voice: Optional[str] = None
    phonetics: Optional[str] = None


class CEFRWordsResponse(BaseModel):
    """多等级随机列表响应"""
    levels: List[str]
    words: List[CEFRWordDefinition] = Field(default_factory=list)


# ==================== 公共配置 ====================
class ConfigLimits(BaseModel):
    """查询限制"""
    query_max_limit: int
    cefr_default_page_size: int


class PublicConfigResponse(BaseModel):
    """公共配置响应"""
    version: str
    limits: ConfigLimits
    cefr_levels: List[str]
