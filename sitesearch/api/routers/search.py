from typing import List

from fastapi import APIRouter, HTTPException, Query
from fastapi.responses import HTMLResponse
from pydantic import BaseModel

from sitesearch.services.search_service import SearchService


class SearchHit(BaseModel):
    url: str
    score: float


SEARCH_PAGE = """<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>SiteSearch</title>
  <style>
    body { font-family: system-ui, sans-serif; max-width: 640px; margin: 2rem auto; padding: 0 1rem; }
    input[type="search"] { width: 100%; padding: 0.5rem; font-size: 1rem; box-sizing: border-box; }
    #results a { display: block; padding: 0.5rem 0 0; color: #06c; }
    .score, .none { font-size: 0.875rem; color: #666; }
  </style>
</head>
<body>
  <h1>SiteSearch</h1>
  <form id="form">
    <input type="search" id="q" placeholder="Search terms" autofocus>
    <button type="submit">Search</button>
  </form>
  <div id="results"></div>
  <script>
    const results = document.getElementById('results');

    function note(text) {
      const p = document.createElement('p');
      p.className = 'none';
      p.textContent = text;
      return p;
    }

    function hitNodes(h) {
      const a = document.createElement('a');
      if (/^https?:/i.test(h.url)) a.setAttribute('href', h.url);
      a.setAttribute('target', '_blank');
      a.setAttribute('rel', 'noopener');
      a.textContent = h.url;
      const score = document.createElement('span');
      score.className = 'score';
      score.textContent = 'score: ' + h.score.toFixed(4);
      return [a, score];
    }

    document.getElementById('form').addEventListener('submit', async (e) => {
      e.preventDefault();
      const query = document.getElementById('q').value.trim();
      if (!query) { results.replaceChildren(); return; }
      const r = await fetch('/search?q=' + encodeURIComponent(query));
      const hits = await r.json();
      if (!r.ok) { results.replaceChildren(note('Error: ' + (hits.detail || r.status))); return; }
      if (hits.length === 0) { results.replaceChildren(note('No results')); return; }
      results.replaceChildren(...hits.flatMap(hitNodes));
    });
  </script>
</body>
</html>
"""


def create_search_router(search_service: SearchService):
    router = APIRouter(tags=["Search"])

    def _require_index():
        if not search_service.ready:
            raise HTTPException(status_code=503, detail="index not loaded")

    @router.get("/", response_class=HTMLResponse)
    def index_page():
        return SEARCH_PAGE

    @router.get("/search", response_model=List[SearchHit])
    def search_ranked(q: str = Query("", description="Free-text query")):
        """TF-IDF ranked results, highest score first."""
        _require_index()
        return [SearchHit(url=url, score=score) for url, score in search_service.ranked(q)]

    @router.get("/search/exact", response_model=List[str])
    def search_exact(q: str = Query("", description="All terms must match")):
        _require_index()
        return search_service.exact(q)

    return router
