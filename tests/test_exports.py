"""Tests for package exports."""


def test_pipeline_exports_available() -> None:
    """Test that the public API is importable from the package root."""
    from neba_pipeline import (
        AsyncMemoryAdapter,
        CachedQuery,
        CacheInvalidator,
        Dispatcher,
        QueryCachingBehavior,
        RequestLoggingBehavior,
        Result,
        ValidationBehavior,
        build_dispatcher,
        build_key,
        build_tags,
    )

    # Just verify they're importable
    assert AsyncMemoryAdapter is not None
    assert CachedQuery is not None
    assert CacheInvalidator is not None
    assert Dispatcher is not None
    assert QueryCachingBehavior is not None
    assert RequestLoggingBehavior is not None
    assert Result is not None
    assert ValidationBehavior is not None
    assert build_dispatcher is not None
    assert build_key is not None
    assert build_tags is not None


def test_all_names_resolve() -> None:
    import neba_pipeline

    missing = [
        name
        for name in neba_pipeline.__all__
        if name != "AsyncRedisAdapter" and not hasattr(neba_pipeline, name)
    ]
    assert missing == []


def test_store_annotations_resolve() -> None:
    """Store methods named ``set`` must not shadow the builtin in annotations."""
    import typing

    from neba_pipeline.adapters import AsyncCacheStore, AsyncMemoryAdapter

    for store_type in (AsyncCacheStore, AsyncMemoryAdapter):
        hints = typing.get_type_hints(store_type.keys_for_tag)
        assert hints["return"] == set[str]
