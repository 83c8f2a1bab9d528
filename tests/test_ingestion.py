"""Transcript CSV loading and cleaning (no database)."""

import pytest

from podsearch.ingestion.pipeline import IngestionPipeline

from fakes import FakeEmbeddingService


def write_csv(tmp_path, text):
    path = tmp_path / "transcripts.csv"
    path.write_text(text)
    return path


def test_load_frame_fills_optional_columns(tmp_path):
    path = write_csv(
        tmp_path,
        "episode_id,content\n"
        '001,"  Airbnb started   with air mattresses "\n'
        "002,\n",
    )

    df = IngestionPipeline.load_frame(path)

    assert list(df.columns) == ["episode_id", "episode_title", "content", "start_timestamp", "url"]
    assert len(df) == 1
    row = df.iloc[0]
    assert row["episode_id"] == "001"
    assert row["episode_title"] == "001"
    assert row["content"] == "Airbnb started with air mattresses"
    assert row["start_timestamp"] == 0.0
    assert row["url"] == ""


def test_load_frame_keeps_provided_metadata(tmp_path):
    path = write_csv(
        tmp_path,
        "episode_id,episode_title,content,start_timestamp,url\n"
        "ep-1,How Airbnb Won,[12:04] the business model of Airbnb,724.5,https://youtu.be/x?t=724\n",
    )

    row = IngestionPipeline.load_frame(path).iloc[0]

    assert row["episode_title"] == "How Airbnb Won"
    assert row["content"] == "the business model of Airbnb"
    assert row["start_timestamp"] == 724.5
    assert row["url"] == "https://youtu.be/x?t=724"


def test_load_frame_requires_content_column(tmp_path):
    path = write_csv(tmp_path, "episode_id,text\nep-1,hello\n")

    with pytest.raises(ValueError, match="content"):
        IngestionPipeline.load_frame(path)


def test_ingest_missing_file(tmp_path):
    pipeline = IngestionPipeline(FakeEmbeddingService())

    with pytest.raises(FileNotFoundError):
        pipeline.ingest_csv(tmp_path / "missing.csv")
