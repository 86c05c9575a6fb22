from apps.generation.fallback_catalog import DEFAULT_STEPS, FallbackCatalog


def test_known_careers_have_six_steps_each() -> None:
    catalog = FallbackCatalog()

    assert catalog.known_careers() == ["web-development", "data-science"]
    for career in catalog.known_careers():
        steps = catalog.default_steps(career)
        assert [step.step_number for step in steps] == [1, 2, 3, 4, 5, 6]
        assert all(step.title and step.description and step.skills for step in steps)


def test_unknown_career_falls_back_to_web_development() -> None:
    catalog = FallbackCatalog()

    steps = catalog.default_steps("marine-biology")

    assert [step.title for step in steps] == [entry["title"] for entry in DEFAULT_STEPS["web-development"]]
    assert steps[0].title == "HTML & CSS Fundamentals"


def test_career_lookup_is_exact() -> None:
    steps = FallbackCatalog().default_steps("Data-Science")

    assert steps[0].title == "HTML & CSS Fundamentals"


def test_known_step_title_returns_curated_videos() -> None:
    bundle = FallbackCatalog().default_resources("web-development", "JavaScript Basics")

    assert [video.title for video in bundle.videos] == [
        "JavaScript Tutorial for Beginners",
        "Modern JavaScript ES6+ Features",
    ]
    assert len(bundle.documents) == 3
    assert len(bundle.projects) == 3
    assert len(bundle.practice) == 4


def test_unknown_step_title_gets_generic_search_video() -> None:
    bundle = FallbackCatalog().default_resources("data-science", "Feature Stores")

    assert len(bundle.videos) == 1
    video = bundle.videos[0]
    assert video.title == "Feature Stores - Tutorial"
    assert video.url == "https://youtube.com/results?search_query=Feature%20Stores%20tutorial"
    assert bundle.total() == 11
