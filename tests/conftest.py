"""
Shared fixtures: a loader whose HTTP traffic goes to an in-process handler.
"""
import httpx
import pytest

from backend.core.ingestion.loading import CsvFetcher, DataLoadingManager

BASE_URL = "http://dashboard.test"


class RecordingSleep:
    """Stands in for asyncio.sleep and records the requested delays."""

    def __init__(self):
        self.delays = []

    async def __call__(self, seconds):
        self.delays.append(seconds)


class ScriptedHandler:
    """MockTransport handler replaying a list of responses (or exceptions).

    The last entry repeats once the script runs out.
    """

    def __init__(self, *responses):
        self.responses = list(responses)
        self.requests = []

    def __call__(self, request):
        self.requests.append(request)
        response = self.responses.pop(0) if len(self.responses) > 1 else self.responses[0]
        if isinstance(response, Exception):
            raise response
        # Fresh copy per request, a Response is bound to a single exchange
        return httpx.Response(response.status_code, content=response.content, headers=response.headers)


def make_manager(handler, **kwargs):
    client = httpx.AsyncClient(base_url=BASE_URL, transport=httpx.MockTransport(handler))
    return DataLoadingManager(fetcher=CsvFetcher(client=client), **kwargs)


@pytest.fixture
def sleep():
    return RecordingSleep()
