from sqlalchemy import Column, Integer, String, ForeignKey, Text
from sqlalchemy.orm import relationship, declarative_base

Base = declarative_base()

# 表名和列名沿用既有词典库（由数据导入脚本写入），Python 侧属性统一为 snake_case
# 本服务对这些表只读


class Word(Base):
    """词条（根实体）"""
    __tablename__ = "Words"

    id = Column("Id", Integer, primary_key=True, autoincrement=True)
    word = Column("Word", String(255), nullable=False, unique=True)

    # 关联
    infos = relationship("WordInfo", back_populates="word", cascade="all, delete-orphan")
    examples = relationship("Example", back_populates="word", cascade="all, delete-orphan")
    cefr = relationship("CEFR", back_populates="word", uselist=False, cascade="all, delete-orphan")


class WordInfo(Base):
    """词性 + 释义，一个词可以有多条"""
    __tablename__ = "WordInfo"

    id = Column(Integer, primary_key=True, autoincrement=True)
    word_id = Column("wordId", Integer, ForeignKey("Words.Id", ondelete="CASCADE"), index=True)
    part_of_speech = Column("partOfSpeech", String(64), nullable=False)
    definition = Column(Text, nullable=False)

    word = relationship("Word", back_populates="infos")


class Example(Base):
    """例句"""
    __tablename__ = "Examples"

    id = Column(Integer, primary_key=True, autoincrement=True)
    word_id = Column("wordId", Integer, ForeignKey("Words.Id", ondelete="CASCADE"), index=True)
    example = Column(Text, nullable=False)

    word = relationship("Word", back_populates="examples")


class CEFR(Base):
    """
    CEFR 等级信息（一对一）
    voice 为音频资源的引用（文件名或 URL）
    """
    __tablename__ = "CEFR"

    id = Column("Id", Integer, primary_key=True, autoincrement=True)
    word_id = Column("wordId", Integer, ForeignKey("Words.Id", ondelete="CASCADE"), unique=True)
    level = Column("Level", String(8), nullable=False, index=True)
    voice = Column("Voice", String(255), nullable=True)
    phonetics = Column("Phonetics", String(255), nullable=True)

    word = relationship("Word", back_populates="cefr")
