"""Tests for article listing, search and view counting."""

from datetime import datetime, timedelta, timezone


BASE_DATE = datetime(2025, 1, 1, tzinfo=timezone.utc)


def day(n):
    return BASE_DATE + timedelta(days=n)


def test_detail_fetch_increments_views_by_one(client, create_article):
    article = create_article(title="Volunteering 101", published_date=day(0))
    assert article.views == 0

    first = client.get(f"/api/articles/{article.id}")
    assert first.status_code == 200
    assert first.json()["views"] == 1
    assert first.json()["isActive"] is True

    second = client.get(f"/api/articles/{article.id}")
    assert second.json()["views"] == 2

    listed = {a["id"]: a for a in client.get("/api/articles").json()}
    assert listed[article.id]["views"] == 2


def test_unknown_or_inactive_article_returns_404(client, create_article):
    hidden = create_article(title="Draft", is_active=False)
    for article_id in (hidden.id, "article_missing"):
        resp = client.get(f"/api/articles/{article_id}")
        assert resp.status_code == 404
        assert resp.json()["code"] == "article_not_found"


def test_list_orders_featured_first_then_newest(client, create_article):
    old_plain = create_article(title="Old", published_date=day(0))
    new_plain = create_article(title="New", published_date=day(5))
    featured = create_article(title="Featured", published_date=day(1), is_featured=True)
    create_article(title="Hidden", is_active=False)

    ids = [a["id"] for a in client.get("/api/articles").json()]
    assert ids == [featured.id, new_plain.id, old_plain.id]


def test_featured_returns_at_most_five_newest(client, create_article):
    featured = [
        create_article(title=f"Featured {i}", published_date=day(i), is_featured=True)
        for i in range(7)
    ]
    create_article(title="Plain", published_date=day(10))

    resp = client.get("/api/articles/featured")
    assert resp.status_code == 200
    ids = [a["id"] for a in resp.json()]
    assert ids == [a.id for a in reversed(featured)][:5]


def test_search_matches_title_or_description(client, create_article):
    by_title = create_article(title="Disaster relief basics", published_date=day(2))
    by_description = create_article(
        title="Field notes", description="What we learned in RELIEF work", published_date=day(1)
    )
    create_article(title="Cooking for crowds", description="Soup kitchens", published_date=day(3))

    resp = client.get("/api/articles/search", params={"title": "relief"})
    assert resp.status_code == 200
    assert [a["id"] for a in resp.json()] == [by_title.id, by_description.id]


def test_search_folds_non_ascii_case(client, create_article):
    match = create_article(title="Über das Ehrenamt", published_date=day(1))
    create_article(title="Soup kitchens", published_date=day(2))

    resp = client.get("/api/articles/search", params={"title": "über"})
    assert [a["id"] for a in resp.json()] == [match.id]


def test_articles_by_category(client, create_article):
    edu = create_article(title="Reading club", category="education")
    create_article(title="Beach day", category="environment")

    resp = client.get("/api/articles/category/education")
    assert [a["id"] for a in resp.json()] == [edu.id]
    assert client.get("/api/articles/category/unknown").json() == []


def test_list_uses_camel_case_keys(client, create_article):
    create_article(title="Keys", image_url="https://img.example/1.png", author_name="Siti")
    article = client.get("/api/articles").json()[0]
    assert article["imageUrl"] == "https://img.example/1.png"
    assert article["authorName"] == "Siti"
    assert "image_url" not in article
