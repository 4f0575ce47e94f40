import math

from bs4 import BeautifulSoup


def count_words(text: str) -> int:
    """Strip any HTML tags and count words."""
    if not text:
        return 0
    plain = BeautifulSoup(text, 'html.parser').get_text(separator=' ')
    return len(plain.split())


def reading_time_minutes(word_count: int, wpm: int = 200) -> int:
    """Estimated reading time in whole minutes, never below one."""
    return max(1, math.ceil(word_count / wpm))


def reward_credits(word_count: int, words_per_credit: int = 50,
                   minimum: int = 5, maximum: int = 30) -> int:
    """Credits earned for reading an article, clamped to [minimum, maximum]."""
    return max(minimum, min(maximum, math.ceil(word_count / words_per_credit)))
