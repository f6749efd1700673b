from review_analytics.services.tags import FIXED_VOCABULARY, extract_tags


def test_scenario_security_and_bugs():
    assert extract_tags("This code has critical security risk and bugs.") == ["security", "bugs"]


def test_best_practices_needs_the_phrase():
    assert extract_tags("Excellent work, follows best practices.") == ["best-practices"]
    assert extract_tags("Follows best-practices.") == []


def test_error_triggers_bugs_once():
    assert extract_tags("An error here and a bug there, another error.") == ["bugs"]


def test_all_tags_in_vocabulary_order():
    text = "bug, readability, best practices, performance and security"
    assert extract_tags(text) == ["security", "performance", "readability", "best-practices", "bugs"]


def test_extraction_is_idempotent_and_within_vocabulary():
    text = "Watch the performance of this loop; readability suffers from an error."
    first = extract_tags(text)
    assert first == extract_tags(text)
    assert set(first) <= FIXED_VOCABULARY


def test_no_tags_for_unrelated_text():
    assert extract_tags("Nice and tidy.") == []


def test_matching_ignores_case():
    assert extract_tags("Security holes, poor Performance and an Error.") == ["security", "performance", "bugs"]
    assert extract_tags("Follows Best Practices") == ["best-practices"]
