from homegame.config import Settings


def test_cors_origins_parsing() -> None:
    assert Settings(CORS_ORIGINS="").cors_origins == []
    assert Settings(CORS_ORIGINS="*").cors_origins == ["*"]
    assert Settings(CORS_ORIGINS="http://a.test, http://b.test,").cors_origins == [
        "http://a.test",
        "http://b.test",
    ]


def test_default_denominations() -> None:
    assert Settings(DEFAULT_DENOMINATIONS="1, 5,25").default_denominations == [1.0, 5.0, 25.0]
    assert Settings().DEFAULT_BIG_BLIND > Settings().DEFAULT_SMALL_BLIND
