import pytest
from langchain_core.language_models import FakeListChatModel
from langchain_core.runnables import RunnableLambda

from core.analysis import analyze_image
from core.errors import ClientInputError, ExternalServiceError


def test_full_pipeline(make_blob, terms_file):
    llm = FakeListChatModel(responses=[
        "Water, Sugar, Palm Oil, Salt",
        "**Unhealthy Ingredients Found In the Curated List:**\nsugar, palm oil",
    ])
    result = analyze_image(make_blob(), llm_factory=lambda: llm, terms_path=terms_file)

    assert result["ingredients"] == "Water, Sugar, Palm Oil, Salt"
    assert result["analysis"].startswith("**Unhealthy")
    assert result["foundUnhealthy"] == ["sugar", "palm oil"]


def test_model_receives_image_then_prompt(make_blob, terms_file):
    calls = []

    def fake_model(inp):
        calls.append(inp)
        return "Water, MSG" if len(calls) == 1 else "Looks salty."

    blob = make_blob()
    result = analyze_image(blob, llm_factory=lambda: RunnableLambda(fake_model), terms_path=terms_file)

    assert len(calls) == 2
    content = calls[0][0].content
    assert "list all the ingredients" in content[0]["text"]
    assert content[1]["image_url"]["url"].startswith("data:image/png;base64,")

    prompt_text = calls[1].to_string()
    assert "Ingredients: Water, MSG" in prompt_text
    assert "sugar, msg, palm oil" in prompt_text
    assert result["foundUnhealthy"] == ["msg"]


def test_missing_image_rejected_before_model_call(terms_file):
    def factory():
        raise AssertionError("model must not be built")

    with pytest.raises(ClientInputError):
        analyze_image(None, llm_factory=factory, terms_path=terms_file)


def test_empty_bytes_rejected(make_blob, terms_file):
    blob = make_blob()
    blob.data = b""
    with pytest.raises(ClientInputError):
        analyze_image(blob, llm_factory=lambda: None, terms_path=terms_file)


def test_model_failure_wrapped(make_blob, terms_file):
    def boom(_):
        raise RuntimeError("quota exceeded")

    with pytest.raises(ExternalServiceError) as exc_info:
        analyze_image(make_blob(), llm_factory=lambda: RunnableLambda(boom), terms_path=terms_file)
    assert isinstance(exc_info.value.__cause__, RuntimeError)
    assert "quota exceeded" in str(exc_info.value)


def test_model_construction_failure_wrapped(make_blob, terms_file):
    def factory():
        raise ValueError("GOOGLE_API_KEY missing")

    with pytest.raises(ExternalServiceError):
        analyze_image(make_blob(), llm_factory=factory, terms_path=terms_file)


def test_second_call_failure_wrapped(make_blob, terms_file):
    calls = []

    def flaky(inp):
        calls.append(inp)
        if len(calls) == 2:
            raise ConnectionError("reset by peer")
        return "Sugar"

    with pytest.raises(ExternalServiceError, match="analysis failed"):
        analyze_image(make_blob(), llm_factory=lambda: RunnableLambda(flaky), terms_path=terms_file)


def test_unreadable_term_list_still_analyzes(make_blob, tmp_path):
    llm = FakeListChatModel(responses=["Sugar", "Fine."])
    result = analyze_image(make_blob(), llm_factory=lambda: llm, terms_path=tmp_path / "missing.txt")
    assert result["foundUnhealthy"] == []
    assert result["analysis"] == "Fine."
