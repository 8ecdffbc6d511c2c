from typing import Iterable, Optional, Tuple

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.database import get_db
from app.models import Base, Word, WordInfo, Example, CEFR
from main import app


@pytest.fixture
def engine():
    # 内存库 + StaticPool: 测试会话与请求会话共用同一个连接
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(session_factory):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def add_word(db):
    """
    插入一个词及其关联数据

    infos: [(part_of_speech, definition), ...]
    cefr: (level, phonetics, voice) 或 None
    """
    def _add_word(
        text: str,
        infos: Iterable[Tuple[str, str]] = (),
        examples: Iterable[str] = (),
        cefr: Optional[Tuple[str, Optional[str], Optional[str]]] = None,
    ) -> Word:
        word = Word(word=text)
        word.infos = [WordInfo(part_of_speech=p, definition=d) for p, d in infos]
        word.examples = [Example(example=e) for e in examples]
        if cefr is not None:
            level, phonetics, voice = cefr
            word.cefr = CEFR(level=level, phonetics=phonetics, voice=voice)
        db.add(word)
        db.commit()
        return word

    return _add_word


@pytest.fixture
def cat_and_car(add_word):
    """cat 有 CEFR，car 没有"""
    add_word(
        "cat",
        infos=[("noun", "a small domesticated animal")],
        examples=["The cat sat on the mat."],
        cefr=("A1", "/kæt/", "cat.mp3"),
    )
    add_word("car", infos=[("noun", "a road vehicle")])
