import pytest

from tests.helpers import StubLLM


@pytest.fixture
def stub_llm():
    """Factory: stub_llm(["<scenario>…", ProviderError("down"), …])."""
    return StubLLM
