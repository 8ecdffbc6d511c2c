from datetime import date


def days_since_epoch(day: date, epoch: date) -> int:
    """day 与 epoch 之间相差的整天数（早于 epoch 时为负数）"""
    return (day - epoch).days


def word_of_the_day_rank(day: date, candidate_count: int, epoch: date) -> int:
    """
    计算某一天对应的候选词排名（从 1 开始）

    rank = (days_since_epoch mod candidate_count) + 1
    同一天永远得到同一个排名，排名以 candidate_count 为周期循环。
    Python 的取模结果恒为非负数，所以 epoch 之前的日期同样落在 [1, candidate_count]。

    Raises:
        ValueError: candidate_count 不是正数
    """
    if candidate_count <= 0:
        raise ValueError(f"candidate_count must be positive, got {candidate_count}")
    return days_since_epoch(day, epoch) % candidate_count + 1
