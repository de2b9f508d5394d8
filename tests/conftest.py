"""Shared fixtures: a tiny on-disk corpus."""

import pytest


@pytest.fixture
def corpus(tmp_path):
    """Writes three documents, a docs file and a noise word file. Returns their paths."""
    documents = {
        "doc1.txt": "The cat sat on the mat. The cat was happy! Dog?",
        "doc2.txt": "A dog chased the cat, and the dog barked. Dog dog!",
        "doc3.txt": "Nothing about pets here: only weather, rain and sun.",
    }
    for name, text in documents.items():
        (tmp_path / name).write_text(text, encoding="utf-8")

    docs_file = tmp_path / "docs.txt"
    docs_file.write_text("doc1.txt\ndoc2.txt\ndoc3.txt\n", encoding="utf-8")

    noise_file = tmp_path / "noisewords.txt"
    noise_file.write_text("the\na\non\nand\nwas\nabout\nhere\nonly\n", encoding="utf-8")

    return {"dir": tmp_path, "docs_file": str(docs_file), "noise_words_file": str(noise_file)}
