from __future__ import annotations

import json
from pathlib import Path

import intelligence.llm
import main as cli
from intelligence.llm.base import BaseLLM, LLMResponse


def _write_posts(tmp_path: Path) -> Path:
    rows = [
        {
            "id": "p1",
            "title": "Overflowing bins",
            "category": "Garbage",
            "created_at": "2026-03-01T10:00:00Z",
            "urgency": "high",
            "upvotes": 128,
            "volunteers": 3,
            "location": {"latitude": 34.0522, "longitude": -118.2437},
        },
        {
            "id": "p2",
            "title": "Community cleanup",
            "category": "Event",
            "created_at": "2026-03-01T11:30:00Z",
            "upvotes": 4,
        },
    ]
    path = tmp_path / "posts.json"
    path.write_text(json.dumps({"posts": rows}), encoding="utf-8")
    return path


def test_rank_command_prints_explained_global_feed(tmp_path, capsys) -> None:
    path = _write_posts(tmp_path)

    code = cli.main(["rank", "--posts", str(path), "--sort", "distance", "--now", "2026-03-01T12:00:00Z", "--explain"])

    assert code == 0
    body = json.loads(capsys.readouterr().out)
    assert body["scope"] == "global"
    assert body["effective_sort"] == "priority"
    assert [row["id"] for row in body["posts"]] == ["p1", "p2"]
    assert body["posts"][0]["score"]["total"] == 500.0 + 96.0 + 192.0 + 30.0
    assert body["posts"][1]["score"]["recency"] == 99.0


def test_rank_command_nearby(tmp_path, capsys) -> None:
    path = _write_posts(tmp_path)

    code = cli.main(
        ["rank", "--posts", str(path), "--lat", "34.0522", "--lng", "-118.2437", "--now", "2026-03-01T12:00:00Z"]
    )

    assert code == 0
    body = json.loads(capsys.readouterr().out)
    assert body["scope"] == "nearby"
    assert [row["id"] for row in body["posts"]] == ["p1"]
    assert body["posts"][0]["distance_km"] == 0.0


def test_rank_command_rejects_bad_posts_file(tmp_path, capsys) -> None:
    broken = tmp_path / "broken.json"
    broken.write_text("{not json", encoding="utf-8")
    invalid = tmp_path / "invalid.json"
    invalid.write_text(json.dumps([{"id": "p1", "title": "t", "created_at": "yesterday"}]), encoding="utf-8")

    assert cli.main(["rank", "--posts", str(broken)]) == 1
    assert cli.main(["rank", "--posts", str(invalid)]) == 1
    assert cli.main(["rank", "--posts", str(tmp_path / "missing.json")]) == 1
    assert capsys.readouterr().out == ""


class _ClosingLLM(BaseLLM):
    def __init__(self) -> None:
        super().__init__(model="fake-model")
        self.closed = False

    @property
    def provider(self) -> str:
        return "fake"

    async def acomplete(self, messages, **kwargs) -> LLMResponse:
        return LLMResponse(content='{"urgencyLevel": "medium", "reason": "Blocks one lane"}', model=self.model)

    async def aclose(self) -> None:
        self.closed = True


def test_classify_command_closes_the_client(monkeypatch, capsys) -> None:
    llm = _ClosingLLM()
    monkeypatch.setattr(intelligence.llm, "get_llm", lambda provider=None: llm)

    code = cli.main(["classify", "--category", "Potholes", "--title", "Crack", "--description", "Lane half closed"])

    assert code == 0
    assert json.loads(capsys.readouterr().out) == {"urgency_level": "medium", "reason": "Blocks one lane"}
    assert llm.closed is True


def test_classify_command_rejects_unknown_category() -> None:
    code = cli.main(["classify", "--category", "Volcano", "--title", "Smoke", "--description", "Ash everywhere"])
    assert code == 1
