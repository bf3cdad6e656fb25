"""Тесты кеша моделей."""

import json

import pytest

from lingua import __version__
from lingua.errors import ModelDownloadError
from lingua.model_cache import MANIFEST_NAME, ModelCache, ModelSpec

MODELS = {"tiny": ModelSpec(name="tiny", repo="org/tiny-model", size_mb=1)}


class RecordingFetcher:
    def __init__(self, fail=False):
        self.fail = fail
        self.calls = []

    def __call__(self, repo, target_dir):
        self.calls.append(repo)
        (target_dir / "config.json").write_text("{}", encoding="utf-8")
        if self.fail:
            raise ConnectionError("network down")


class TestModelCache:
    def test_download_writes_manifest(self, tmp_path):
        fetcher = RecordingFetcher()
        cache = ModelCache(tmp_path / "models", fetcher=fetcher, models=MODELS)

        paths = cache.download()

        assert paths == [tmp_path / "models" / "tiny"]
        assert cache.model_exists("tiny")
        manifest = json.loads((paths[0] / MANIFEST_NAME).read_text(encoding="utf-8"))
        assert manifest["model_name"] == "tiny"
        assert manifest["repo"] == "org/tiny-model"
        assert manifest["tool_version"] == __version__
        assert manifest["downloaded_at"]

    def test_cached_model_not_downloaded_again(self, tmp_path):
        fetcher = RecordingFetcher()
        cache = ModelCache(tmp_path, fetcher=fetcher, models=MODELS)

        cache.download(["tiny"])
        cache.download(["tiny"])

        assert fetcher.calls == ["org/tiny-model"]

    def test_failed_download_removes_partial_directory(self, tmp_path):
        cache = ModelCache(tmp_path, fetcher=RecordingFetcher(fail=True), models=MODELS)

        with pytest.raises(ModelDownloadError):
            cache.download()

        assert not (tmp_path / "tiny").exists()
        assert not cache.model_exists("tiny")

    def test_directory_without_manifest_is_redownloaded(self, tmp_path):
        (tmp_path / "tiny").mkdir()
        (tmp_path / "tiny" / "stale.bin").write_bytes(b"x")
        fetcher = RecordingFetcher()
        cache = ModelCache(tmp_path, fetcher=fetcher, models=MODELS)

        assert not cache.model_exists("tiny")
        cache.download()

        assert fetcher.calls == ["org/tiny-model"]
        assert not (tmp_path / "tiny" / "stale.bin").exists()

    def test_unknown_model(self, tmp_path):
        cache = ModelCache(tmp_path, fetcher=RecordingFetcher(), models=MODELS)
        with pytest.raises(ModelDownloadError):
            cache.download(["huge"])

    def test_list_info_clean(self, tmp_path):
        models_dir = tmp_path / "models"
        cache = ModelCache(models_dir, fetcher=RecordingFetcher(), models=MODELS)
        assert cache.list_models() == []

        cache.download()
        (models_dir / "partial").mkdir()

        models = cache.list_models()
        assert [m["name"] for m in models] == ["tiny"]
        info = cache.cache_info()
        assert info["models_count"] == 1
        assert info["cache_directory"] == str(models_dir)

        assert cache.clean_models() is True
        assert not models_dir.exists()
        assert cache.clean_models() is False
