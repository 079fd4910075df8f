from a11y_checker.metrics import exit_code, severity_counts, summarize


def test_total_counts_elements_not_violation_types(make_result):
    result = make_result([("serious", 3), ("minor", 1), ("critical", 2)])
    summary = summarize(result)
    assert summary.total_violations == 6
    assert (summary.critical, summary.serious, summary.moderate, summary.minor) == (2, 3, 0, 1)
    assert summary.url == result.url
    assert summary.timestamp == result.timestamp


def test_buckets_add_up_when_all_impacts_known(make_result):
    summary = summarize(make_result([("moderate", 4), ("moderate", 1), ("minor", 2)]))
    assert summary.critical + summary.serious + summary.moderate + summary.minor == summary.total_violations


def test_unknown_impact_counts_in_total_only(make_result):
    # Deliberately not assigned to any bucket.
    result = make_result([("serious", 1), ("cosmic", 3), (None, 2)])
    summary = summarize(result)
    assert summary.total_violations == 6
    assert summary.serious == 1
    assert summary.critical + summary.serious + summary.moderate + summary.minor == 1
    assert severity_counts(result) == {"minor": 0, "moderate": 0, "serious": 1, "critical": 0}


def test_summarize_empty_result(make_result):
    summary = summarize(make_result([]))
    assert summary.total_violations == 0
    assert summary.critical == summary.serious == summary.moderate == summary.minor == 0


def test_summarize_is_deterministic(make_result):
    result = make_result([("critical", 1), ("minor", 2)])
    assert summarize(result) == summarize(result)


def test_exit_code_critical(make_result):
    assert exit_code(make_result([("critical", 1)])) == 2


def test_exit_code_critical_wins_over_other_issues(make_result):
    assert exit_code(make_result([("minor", 10), ("serious", 4), ("critical", 1)])) == 2


def test_exit_code_minor_only(make_result):
    result = make_result([("minor", 2)])
    summary = summarize(result)
    assert exit_code(result) == 1
    assert summary.total_violations == 2
    assert summary.minor == 2
    assert summary.critical == summary.serious == summary.moderate == 0


def test_exit_code_unknown_impact_is_non_critical(make_result):
    assert exit_code(make_result([("cosmic", 1)])) == 1


def test_exit_code_clean(make_result):
    assert exit_code(make_result([])) == 0
