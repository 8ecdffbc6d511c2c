from typing import Any, Dict, Iterable, List, Optional, Tuple

from app.schemas import CEFRInfo, PartOfSpeechEntry, WordDetail

# ==================== 行 -> 词条 =================
# 词条查询会把 Words 与 WordInfo / CEFR / Examples 做 LEFT JOIN,
# 结果是 WordInfo x Examples 的笛卡尔积, 同一个词会出现在多行中.
# 这里把这些扁平行重新组装成嵌套结构:
#   - 同一个 word 的行合并为一条记录 (保持首次出现的顺序)
#   - (pos, definition) 对、例句文本各自去重 (保持首次出现的顺序)
#   - CEFR 至多一条, 没有时为 None
#
# 每一行只需要支持属性访问: word, part_of_speech, definition,
# level, phonetics, voice, example. 缺少的列按 None 处理.


class _WordAccumulator:
    def __init__(self, word: str):
        self.word = word
        self.pos: Dict[Tuple[str, str], None] = {}  # dict 作为有序集合
        self.examples: Dict[str, None] = {}
        self.cefr: Optional[CEFRInfo] = None

    def add(self, row: Any) -> None:
        part_of_speech = getattr(row, "part_of_speech", None)
        definition = getattr(row, "definition", None)
        if part_of_speech is not None and definition is not None:
            self.pos.setdefault((part_of_speech, definition), None)

        example = getattr(row, "example", None)
        if example is not None:
            self.examples.setdefault(example, None)

        level = getattr(row, "level", None)
        if self.cefr is None and level is not None:
            self.cefr = CEFRInfo(
                level=level,
                phonetics=getattr(row, "phonetics", None),
                voice=getattr(row, "voice", None),
            )

    def build(self) -> WordDetail:
        return WordDetail(
            word=self.word,
            pos=[PartOfSpeechEntry(pos=p, definition=d) for p, d in self.pos],
            examples=list(self.examples),
            cefr=self.cefr,
        )


def assemble_word_details(rows: Iterable[Any]) -> List[WordDetail]:
    """把扁平的 JOIN 结果按词分组、去重，组装为 WordDetail 列表"""
    grouped: Dict[str, _WordAccumulator] = {}
    for row in rows:
        accumulator = grouped.get(row.word)
        if accumulator is None:
            accumulator = grouped[row.word] = _WordAccumulator(row.word)
        accumulator.add(row)
    return [accumulator.build() for accumulator in grouped.values()]


def assemble_word_detail(rows: Iterable[Any]) -> Optional[WordDetail]:
    """
    组装单个词条

    Returns:
        WordDetail，没有任何行时返回 None
    """
    details = assemble_word_details(rows)
    return details[0] if details else None
