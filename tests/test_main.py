"""Tests for the HTTP API."""

import pytest
from fastapi.testclient import TestClient

import main


@pytest.fixture
def client():
    main.reset_index()
    with TestClient(main.app) as c:
        yield c
    main.reset_index()


@pytest.fixture
def corpus_dir(corpus, monkeypatch):
    monkeypatch.setattr(main.settings, "corpus_dir", str(corpus["dir"]))
    return corpus


@pytest.fixture
def built(client, corpus_dir):
    response = client.post(
        "/index",
        json={"docs_file": corpus_dir["docs_file"], "noise_words_file": corpus_dir["noise_words_file"]},
    )
    assert response.status_code == 200
    return response.json()


def doc_names(results):
    return [r.rsplit("/", 1)[-1] for r in results]


class TestIndexEndpoint:
    def test_build_returns_stats(self, built):
        assert built["success"] is True
        assert built["index_stats"]["total_docs"] == 3
        assert built["index_stats"]["unique_terms"] > 0

    def test_relative_paths_resolve_against_corpus_dir(self, client, corpus_dir):
        response = client.post("/index", json={"docs_file": "docs.txt", "noise_words_file": "noisewords.txt"})
        assert response.status_code == 200
        assert response.json()["index_stats"]["total_docs"] == 3

    def test_missing_document_is_an_error(self, client, corpus_dir):
        (corpus_dir["dir"] / "doc2.txt").unlink()
        response = client.post(
            "/index",
            json={"docs_file": corpus_dir["docs_file"], "noise_words_file": corpus_dir["noise_words_file"]},
        )
        assert response.status_code == 500
        assert "doc2" not in response.text

    def test_failed_rebuild_keeps_previous_index(self, client, built, corpus_dir):
        (corpus_dir["dir"] / "broken.txt").write_text("doc1.txt missing.txt\n", encoding="utf-8")
        response = client.post(
            "/index",
            json={"docs_file": "broken.txt", "noise_words_file": corpus_dir["noise_words_file"]},
        )
        assert response.status_code == 500
        assert client.get("/stats").json()["total_docs"] == 3

    def test_file_outside_corpus_dir_rejected(self, client, corpus_dir, tmp_path_factory):
        secret = tmp_path_factory.mktemp("private") / "secret.cfg"
        secret.write_text("db_password=hunter2 other=stuff\n", encoding="utf-8")

        for body in ({"docs_file": str(secret)}, {"noise_words_file": str(secret)}):
            response = client.post("/index", json=body)
            assert response.status_code == 400
            assert "hunter2" not in response.text

    def test_dot_dot_escape_rejected(self, client, corpus_dir):
        response = client.post("/index", json={"docs_file": "../../etc/passwd"})
        assert response.status_code == 400

    def test_unreadable_listing_does_not_echo_contents(self, client, corpus_dir):
        # a corpus file that is not a docs listing: its words become document names
        (corpus_dir["dir"] / "notes.txt").write_text("db_password=hunter2\n", encoding="utf-8")
        response = client.post("/index", json={"docs_file": "notes.txt"})
        assert response.status_code == 500
        assert "hunter2" not in response.text

    def test_queries_served_during_rebuild(self, client, built, corpus_dir, monkeypatch):
        seen = []
        real_stream = main.token_stream

        def stream(doc_path):
            # query the live index while the new one is being built
            seen.append(main.get_index().stats()["total_docs"])
            return real_stream(doc_path)

        monkeypatch.setattr(main, "token_stream", stream)
        response = client.post(
            "/index",
            json={"docs_file": corpus_dir["docs_file"], "noise_words_file": corpus_dir["noise_words_file"]},
        )
        assert response.status_code == 200
        assert seen == [3, 3, 3]


class TestSearchEndpoint:
    def test_before_build(self, client):
        response = client.get("/search", params={"kw1": "cat", "kw2": "dog"})
        assert response.status_code == 409

    def test_ranked_results(self, client, built):
        response = client.get("/search", params={"kw1": "Cat!", "kw2": "dog"})
        body = response.json()
        assert body["kw1"] == "cat"
        assert body["kw2"] == "dog"
        # doc2: dog x4 beats doc1: cat x2; doc1 cat 2 beats doc1 dog 1 and doc2 cat 1
        assert doc_names(body["results"]) == ["doc2.txt", "doc1.txt"]

    def test_no_match_is_null(self, client, built):
        body = client.get("/search", params={"kw1": "zebra", "kw2": "the"}).json()
        assert body["results"] is None
        assert body["kw2"] is None

    def test_k_must_be_positive(self, client, built):
        assert client.get("/search", params={"kw1": "cat", "kw2": "dog", "k": 0}).status_code == 422


class TestKeywordsEndpoint:
    def test_occurrence_list(self, client, built):
        body = client.get("/keywords/DOG").json()
        assert body["keyword"] == "dog"
        assert [o["frequency"] for o in body["occurrences"]] == [4, 1]
        assert doc_names(o["document"] for o in body["occurrences"]) == ["doc2.txt", "doc1.txt"]

    def test_unknown_keyword(self, client, built):
        assert client.get("/keywords/zebra").status_code == 404
