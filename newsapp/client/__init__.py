from newsapp.client.api_client import BackendClient, ClientError  # noqa: F401
from newsapp.client.playback import Playback, ReadAloud  # noqa: F401
from newsapp.client.reading import ReadingSession  # noqa: F401
