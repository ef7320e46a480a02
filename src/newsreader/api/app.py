"""FastAPI application entrypoint."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import HTMLResponse, JSONResponse

from newsreader.api.routes import router
from newsreader.config import Settings
from newsreader.services.cache import ResponseCache

logger = logging.getLogger(__name__)

INDEX_HTML = """
<!DOCTYPE html>
<html lang="en">
  <head>
    <meta charset="utf-8" />
    <meta name="viewport" content="width=device-width, initial-scale=1" />
    <title>News Reader</title>
    <style>
      :root {
        color-scheme: light dark;
        font-family: system-ui, -apple-system, BlinkMacSystemFont, "Segoe UI", sans-serif;
        --accent: #2563eb;
        --muted: #6b7280;
        --card: rgba(127, 127, 127, 0.08);
      }

      body {
        margin: 0;
        padding: 32px 40px;
      }

      header {
        display: flex;
        flex-wrap: wrap;
        gap: 12px;
        align-items: center;
        margin-bottom: 24px;
      }

      header h1 {
        margin: 0 24px 0 0;
        font-size: 1.6rem;
      }

      .tabs button.active {
        background: var(--accent);
        color: white;
      }

      button, select, input {
        font: inherit;
        border-radius: 10px;
        border: 1px solid rgba(127, 127, 127, 0.3);
        padding: 8px 14px;
        background: transparent;
        cursor: pointer;
      }

      .grid {
        display: grid;
        grid-template-columns: repeat(auto-fill, minmax(300px, 1fr));
        gap: 20px;
      }

      .card {
        background: var(--card);
        border-radius: 16px;
        padding: 18px;
        display: flex;
        flex-direction: column;
        gap: 10px;
      }

      .card img {
        width: 100%;
        border-radius: 12px;
        object-fit: cover;
        max-height: 180px;
      }

      .card h2 {
        font-size: 1.05rem;
        margin: 0;
      }

      .meta {
        color: var(--muted);
        font-size: 0.85rem;
      }

      .output {
        white-space: pre-wrap;
        font-size: 0.92rem;
      }

      .status {
        color: var(--muted);
        min-height: 24px;
      }
    </style>
  </head>
  <body>
    <header>
      <h1>News Reader</h1>
      <div class="tabs">
        <button data-tab="news" class="active">Top stories</button>
        <button data-tab="latest">Latest</button>
        <button data-tab="science">ScienceDaily</button>
      </div>
      <input id="query" placeholder="Search" value="technology" />
      <select id="language">
        <option>English</option>
        <option>Spanish</option>
        <option>French</option>
        <option>German</option>
        <option>Hindi</option>
      </select>
    </header>
    <div class="status" id="status"></div>
    <main class="grid" id="grid"></main>
    <script>
      const state = { tab: "news", language: "English" };
      const grid = document.getElementById("grid");
      const statusEl = document.getElementById("status");

      function setStatus(text) {
        statusEl.textContent = text || "";
      }

      async function postJSON(url, body) {
        const response = await fetch(url, {
          method: "POST",
          headers: { "Content-Type": "application/json" },
          body: JSON.stringify(body),
        });
        return response.json();
      }

      async function loadArticles() {
        const query = encodeURIComponent(document.getElementById("query").value);
        const endpoints = {
          news: `/api/news?q=${query}`,
          latest: `/api/news2?q=${query}`,
          science: "/api/sciencedaily",
        };
        setStatus("Loading…");
        grid.innerHTML = "";
        try {
          const response = await fetch(endpoints[state.tab]);
          const data = await response.json();
          if (data.error) {
            setStatus(data.error);
            return;
          }
          setStatus(`${data.articles.length} articles`);
          data.articles.forEach(renderCard);
        } catch (error) {
          setStatus(`Failed to load articles: ${error}`);
        }
      }

      function isWebUrl(value) {
        return typeof value === "string" && /^https?:\\/\\//i.test(value);
      }

      function renderCard(article) {
        const card = document.createElement("article");
        card.className = "card";
        const source = article.source ? article.source.name : "ScienceDaily";
        card.innerHTML = `
          <img alt="" hidden />
          <h2><a target="_blank" rel="noopener"></a></h2>
          <div class="meta"></div>
          <p></p>
          <div>
            <button data-action="summarize">Summarize</button>
            <button data-action="translate">Translate</button>
            ${state.tab === "science" ? '<button data-action="scrape">Key points</button>' : ""}
          </div>
          <div class="output"></div>`;
        const link = card.querySelector("h2 a");
        if (isWebUrl(article.url)) {
          link.href = article.url;
        }
        const image = card.querySelector("img");
        if (isWebUrl(article.urlToImage)) {
          image.src = article.urlToImage;
          image.hidden = false;
        }
        link.textContent = article.title;
        card.querySelector(".meta").textContent = `${source} · ${article.publishedAt || ""}`;
        card.querySelector("p").textContent = article.description || "";
        const output = card.querySelector(".output");
        const text = [article.title, article.description, article.content].filter(Boolean).join("\\n\\n");

        card.querySelector('[data-action="summarize"]').onclick = async () => {
          output.textContent = "Summarizing…";
          const data = await postJSON("/api/summarize", { content: text });
          output.textContent = data.summary || data.error;
        };
        card.querySelector('[data-action="translate"]').onclick = async () => {
          output.textContent = "Translating…";
          const data = await postJSON("/api/translate", { content: text, targetLanguage: state.language });
          output.textContent = data.translation || data.error;
        };
        const scrapeButton = card.querySelector('[data-action="scrape"]');
        if (scrapeButton) {
          scrapeButton.onclick = async () => {
            output.textContent = "Loading article…";
            const data = await postJSON("/api/scrape", { url: article.url });
            output.textContent = data.error ? data.error : (data.keyPoints || []).map((point) => `- ${point}`).join("\\n");
          };
        }
        grid.appendChild(card);
      }

      document.querySelectorAll(".tabs button").forEach((button) => {
        button.onclick = () => {
          document.querySelectorAll(".tabs button").forEach((other) => other.classList.remove("active"));
          button.classList.add("active");
          state.tab = button.dataset.tab;
          loadArticles();
        };
      });
      document.getElementById("query").addEventListener("change", loadArticles);
      document.getElementById("language").addEventListener("change", (event) => {
        state.language = event.target.value;
      });

      loadArticles();
    </script>
  </body>
</html>
"""


async def request_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Answer malformed request bodies and parameters with a 400."""

    logger.info("Rejected invalid request to %s", request.url.path)
    return JSONResponse(
        {"error": "Invalid request", "details": jsonable_encoder(exc.errors())},
        status_code=400,
    )


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or Settings.from_env()

    app = FastAPI(title="News Reader", description="News feed, scraping and AI reading helpers")
    app.state.settings = settings
    app.state.cache = ResponseCache(settings.cache_ttl_seconds)
    app.add_exception_handler(RequestValidationError, request_validation_error)
    app.include_router(router, prefix="/api")

    @app.get("/", response_class=HTMLResponse)
    async def index() -> str:
        return INDEX_HTML

    return app


app = create_app()
