from sitesearch.domain.visited_tracker import VisitedTracker


def test_url_not_visited_initially():
    tracker = VisitedTracker()
    assert not tracker.is_visited("https://example.com/")


def test_marking_url_makes_it_visited():
    tracker = VisitedTracker()
    tracker.mark("https://example.com/")
    assert tracker.is_visited("https://example.com/")
    assert "https://example.com/" in tracker


def test_different_urls_tracked_independently():
    tracker = VisitedTracker()
    tracker.mark("https://example.com/")
    assert tracker.is_visited("https://example.com/")
    assert not tracker.is_visited("https://example.com/other")


def test_marking_same_url_twice_is_idempotent():
    tracker = VisitedTracker()
    tracker.mark("https://example.com/")
    tracker.mark("https://example.com/")
    assert tracker.is_visited("https://example.com/")
    assert len(tracker) == 1


def test_tracker_never_forgets_urls():
    tracker = VisitedTracker()
    urls = [f"https://example.com/{i}" for i in range(5000)]
    for url in urls:
        tracker.mark(url)
    assert all(tracker.is_visited(url) for url in urls)
    assert len(tracker) == 5000
