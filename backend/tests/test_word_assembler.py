from collections import namedtuple

from app.utils.word_assembler import assemble_word_detail, assemble_word_details

Row = namedtuple("Row", "word part_of_speech definition level phonetics voice example")


def test_join_fan_out_is_collapsed():
    # 2 条释义 x 2 条例句 -> 4 行
    rows = [
        Row("run", "verb", "move fast", "A1", "/rʌn/", "run.mp3", "I run."),
        Row("run", "verb", "move fast", "A1", "/rʌn/", "run.mp3", "We run daily."),
        Row("run", "noun", "an act of running", "A1", "/rʌn/", "run.mp3", "I run."),
        Row("run", "noun", "an act of running", "A1", "/rʌn/", "run.mp3", "We run daily."),
    ]

    detail = assemble_word_detail(rows)

    assert detail.word == "run"
    assert [(p.pos, p.definition) for p in detail.pos] == [
        ("verb", "move fast"),
        ("noun", "an act of running"),
    ]
    assert detail.examples == ["I run.", "We run daily."]
    assert detail.cefr.level == "A1"
    assert detail.cefr.phonetics == "/rʌn/"
    assert detail.cefr.voice == "run.mp3"


def test_same_pos_with_different_definitions_are_kept():
    rows = [
        Row("bank", "noun", "a financial institution", None, None, None, None),
        Row("bank", "noun", "the side of a river", None, None, None, None),
        Row("bank", "noun", "a financial institution", None, None, None, None),
    ]

    detail = assemble_word_detail(rows)

    assert len(detail.pos) == 2


def test_missing_cefr_is_none_and_missing_examples_is_empty_list():
    rows = [Row("car", "noun", "a road vehicle", None, None, None, None)]

    detail = assemble_word_detail(rows)

    assert detail.cefr is None
    assert detail.examples == []
    assert detail.model_dump()["cefr"] is None


def test_word_without_any_info_rows():
    rows = [Row("zzz", None, None, None, None, None, None)]

    detail = assemble_word_detail(rows)

    assert detail.word == "zzz"
    assert detail.pos == []
    assert detail.examples == []


def test_cefr_with_null_phonetics_and_voice():
    rows = [Row("tree", "noun", "a tall plant", "A2", None, None, None)]

    detail = assemble_word_detail(rows)

    assert detail.cefr.level == "A2"
    assert detail.cefr.phonetics is None
    assert detail.cefr.voice is None


def test_rows_without_example_column():
    ShortRow = namedtuple("ShortRow", "word part_of_speech definition")

    detail = assemble_word_detail([ShortRow("sun", "noun", "the star")])

    assert detail.examples == []
    assert detail.cefr is None


def test_groups_multiple_words_in_first_seen_order():
    rows = [
        Row("b", "noun", "second letter", None, None, None, None),
        Row("a", "noun", "first letter", None, None, None, None),
        Row("b", "noun", "a grade", None, None, None, None),
    ]

    details = assemble_word_details(rows)

    assert [d.word for d in details] == ["b", "a"]
    assert len(details[0].pos) == 2


def test_no_rows():
    assert assemble_word_detail([]) is None
    assert assemble_word_details([]) == []
