"""Client-side feed state: the article list, a single cursor, and the
save / history / credits side effects fired as the reader moves through it.
"""

import logging

from newsapp.client.api_client import ClientError

logger = logging.getLogger(__name__)


def speech_text(article):
    return f"{article.get('title', '')}. {article.get('content', '')}"


class ReadingSession:

    def __init__(self, client, read_aloud=None, credits=0):
        self.client = client
        self.read_aloud = read_aloud
        self.articles = []
        self.current_index = 0
        self.credits = credits
        self.saved = set()
        self.error = None
        self._read = set()

    @property
    def current(self):
        if not self.articles:
            return None
        return self.articles[self.current_index]

    def load_headlines(self):
        self.error = None
        try:
            self.articles = self.client.top_headlines()
        except ClientError as e:
            logger.warning('Failed to load news: %s', e)
            self.error = 'Failed to load news'
            return self.articles
        self.current_index = 0
        return self.articles

    def search(self, query):
        """Replace the list with search results; an empty result keeps the old list."""
        self.error = None
        try:
            results = self.client.search_news(query)
        except ClientError as e:
            logger.warning('Search failed: %s', e)
            self.error = 'Search failed'
            return self.articles
        if results:
            self.articles = results
            self.current_index = 0
        return self.articles

    def next_article(self):
        if self.articles:
            self.current_index = (self.current_index + 1) % len(self.articles)
        return self.current

    def previous_article(self):
        if self.articles:
            self.current_index = (self.current_index - 1) % len(self.articles)
        return self.current

    def go_to(self, index):
        if not 0 <= index < len(self.articles):
            raise IndexError(index)
        self.current_index = index
        return self.current

    def open_current(self):
        """Record the current article in history and award its credits once."""
        article = self.current
        if article is None:
            return None

        article_id = article['id']
        try:
            self.client.add_to_history(article_id)
        except ClientError as e:
            logger.warning('Could not add %s to history: %s', article_id, e)

        if article_id not in self._read:
            self._read.add(article_id)
            self.credits += article.get('credits', 0)
        return article

    def save_current(self):
        article = self.current
        if article is None:
            return None
        if article['id'] in self.saved:
            return self.saved
        try:
            self.client.save_article(article['id'])
        except ClientError as e:
            # Already saved on the server counts as saved here
            if e.error != 'Article already saved':
                raise
        self.saved.add(article['id'])
        return self.saved

    def read_current_aloud(self):
        if self.read_aloud is None or self.current is None:
            return None
        return self.read_aloud.acquire(self.current['id'], speech_text(self.current))

    def stop_reading(self):
        if self.read_aloud is not None:
            self.read_aloud.stop()
