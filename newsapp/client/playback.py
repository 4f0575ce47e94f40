"""Read-aloud with at most one active playback.

``ReadAloud.acquire`` hands out a ``Playback`` handle. Acquiring a new one
releases whatever was playing first, so two articles are never spoken at
the same time. The speech engine is any object with ``speak(text)`` and
``stop()``.
"""

import logging

logger = logging.getLogger(__name__)


class Playback:

    def __init__(self, owner, article_id, text):
        self._owner = owner
        self.article_id = article_id
        self.text = text
        self.active = True

    def release(self):
        if not self.active:
            return
        self.active = False
        self._owner._released(self)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.release()
        return False


class ReadAloud:

    def __init__(self, engine):
        self.engine = engine
        self._current = None

    @property
    def current(self):
        return self._current

    @property
    def is_playing(self):
        return self._current is not None

    def acquire(self, article_id, text):
        if self._current is not None:
            self._current.release()

        playback = Playback(self, article_id, text)
        self._current = playback
        try:
            self.engine.speak(text)
        except Exception:
            logger.error('Speech error for article %s', article_id)
            self._current = None
            playback.active = False
            raise
        return playback

    def stop(self):
        if self._current is not None:
            self._current.release()

    def _released(self, playback):
        if self._current is playback:
            self._current = None
            self.engine.stop()
