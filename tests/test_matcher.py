import itertools

import pytest

from snapback.matcher import (
    MatchMethod,
    WindowCandidate,
    WindowMatcher,
    WindowMatchInfo,
    digest,
)
from snapback.models import Frame, WindowInfo


def candidate(window_id, app_name, x, y, width=800, height=600, title=None, pid=1):
    return WindowCandidate(
        window_id=window_id,
        app_name=app_name,
        frame=Frame(x, y, width, height),
        pid=pid,
        title=title,
    )


@pytest.fixture
def matcher():
    return WindowMatcher()


def test_digest_is_stable_sha256():
    assert digest("Firefox") == digest("Firefox")
    assert digest("Firefox") != digest("firefox")
    assert len(digest("Firefox")) == 64


def test_match_info_keeps_only_digests():
    info = WindowMatchInfo.capture("Firefox", Frame(0, 0, 10, 20), "secret title")
    assert info.app_name_hash == digest("Firefox")
    assert info.title_hash == digest("secret title")
    assert "secret title" not in repr(info)
    assert info.size == (10, 20)


def test_candidate_hashes_match_capture_digests():
    c = candidate(1, "Firefox", 0, 0, title="GitHub")
    assert c.app_name_hash == digest("Firefox")
    assert c.title_hash == digest("GitHub")
    assert candidate(2, "Firefox", 0, 0).title_hash is None


def test_candidate_from_window_info():
    window = WindowInfo(window_id=9, app_name="Mail", pid=55, frame=Frame(1, 2, 3, 4), window_title="Inbox")
    c = WindowCandidate.from_window_info(window)
    assert (c.window_id, c.app_name, c.pid, c.title) == (9, "Mail", 55, "Inbox")
    assert c.frame == Frame(1, 2, 3, 4)


def test_title_hash_picks_the_matching_tab_title(matcher):
    saved = WindowMatchInfo.capture(
        "Firefox", Frame(100, 100, 1200, 800), "GitHub - Mozilla Firefox"
    )
    candidates = [
        candidate(1, "Firefox", 100, 100, 1200, 800, title="YouTube - Mozilla Firefox"),
        candidate(2, "Firefox", 300, 300, 1000, 700, title="GitHub - Mozilla Firefox"),
        candidate(3, "Firefox", 500, 500, 1200, 800, title="Twitter - Mozilla Firefox"),
    ]
    for ordering in itertools.permutations(candidates):
        result = matcher.find_match(saved, list(ordering))
        assert result is not None
        assert result.candidate.window_id == 2
        assert result.method == MatchMethod.TITLE_HASH


def test_handle_exact_beats_every_other_tier(matcher):
    saved = WindowMatchInfo.capture("Terminal", Frame(0, 0, 800, 600), "zsh")
    candidates = [
        candidate(1, "Terminal", 0, 0, title="zsh"),
        candidate(2, "Terminal", 0, 0),
        candidate(3, "Terminal", 900, 900, 300, 200, title="other"),
    ]
    for ordering in itertools.permutations(candidates):
        result = matcher.find_match(saved, list(ordering), preferred_window_id=3)
        assert result.candidate.window_id == 3
        assert result.method == MatchMethod.HANDLE_EXACT


def test_handle_reused_by_another_app_is_not_exact(matcher):
    saved = WindowMatchInfo.capture("Terminal", Frame(0, 0, 800, 600))
    candidates = [candidate(7, "Notes", 0, 0), candidate(8, "Terminal", 50, 50)]
    result = matcher.find_match(saved, candidates, preferred_window_id=7)
    assert result.candidate.window_id == 8
    assert result.method == MatchMethod.SIZE_APPROXIMATE


def test_nearest_origin_wins_within_a_tier(matcher):
    saved = WindowMatchInfo.capture("Terminal", Frame(100, 100, 800, 600), "zsh")
    candidates = [
        candidate(1, "Terminal", 900, 100, title="zsh"),
        candidate(2, "Terminal", 100, 100, title="zsh"),
    ]
    result = matcher.find_match(saved, candidates)
    assert result.candidate.window_id == 2
    assert result.method == MatchMethod.TITLE_HASH


def test_equal_distance_keeps_input_order(matcher):
    saved = WindowMatchInfo.capture("Terminal", Frame(100, 100, 800, 600))
    candidates = [
        candidate(1, "Terminal", 200, 100),
        candidate(2, "Terminal", 0, 100),
    ]
    assert matcher.find_match(saved, candidates).candidate.window_id == 1
    assert matcher.find_match(saved, candidates[::-1]).candidate.window_id == 2


@pytest.mark.parametrize(
    "delta, method",
    [
        (0, MatchMethod.SIZE_APPROXIMATE),
        (20, MatchMethod.SIZE_APPROXIMATE),
        (21, MatchMethod.APP_NAME_ONLY),
    ],
)
def test_size_tolerance_boundary(matcher, delta, method):
    saved = WindowMatchInfo.capture("Preview", Frame(0, 0, 800, 600))
    for width, height in ((800 + delta, 600), (800, 600 - delta)):
        result = matcher.find_match(saved, [candidate(1, "Preview", 0, 0, width, height)])
        assert result.method == method


def test_size_tolerance_is_configurable():
    saved = WindowMatchInfo.capture("Preview", Frame(0, 0, 800, 600))
    candidates = [candidate(1, "Preview", 0, 0, 850, 600)]
    assert WindowMatcher(size_tolerance=50).find_match(saved, candidates).method == (
        MatchMethod.SIZE_APPROXIMATE
    )
    assert WindowMatcher().find_match(saved, candidates).method == MatchMethod.APP_NAME_ONLY


def test_title_match_preferred_over_size_match(matcher):
    saved = WindowMatchInfo.capture("Code", Frame(0, 0, 800, 600), "main.py")
    candidates = [
        candidate(1, "Code", 0, 0, 800, 600, title="README.md"),
        candidate(2, "Code", 700, 700, 400, 300, title="main.py"),
    ]
    result = matcher.find_match(saved, candidates)
    assert result.candidate.window_id == 2
    assert result.method == MatchMethod.TITLE_HASH


def test_missing_saved_title_never_matches_by_title(matcher):
    saved = WindowMatchInfo.capture("Code", Frame(0, 0, 800, 600))
    result = matcher.find_match(saved, [candidate(1, "Code", 0, 0, title="main.py")])
    assert result.method == MatchMethod.SIZE_APPROXIMATE


def test_excluded_candidate_falls_back_to_next_tier(matcher):
    saved = WindowMatchInfo.capture("Code", Frame(0, 0, 800, 600), "main.py")
    candidates = [
        candidate(1, "Code", 0, 0, title="main.py"),
        candidate(2, "Code", 10, 10, title="other.py"),
    ]
    result = matcher.find_match(saved, candidates, excluding={1})
    assert result.candidate.window_id == 2
    assert result.method == MatchMethod.SIZE_APPROXIMATE


def test_excluded_preferred_handle_is_not_returned(matcher):
    saved = WindowMatchInfo.capture("Code", Frame(0, 0, 800, 600))
    candidates = [candidate(1, "Code", 0, 0)]
    assert matcher.find_match(saved, candidates, excluding={1}, preferred_window_id=1) is None


def test_no_match_when_app_differs(matcher):
    saved = WindowMatchInfo.capture("Safari", Frame(0, 0, 800, 600), "Apple")
    candidates = [candidate(1, "Firefox", 0, 0, title="Apple")]
    assert matcher.find_match(saved, candidates) is None
    assert matcher.find_match(saved, []) is None
