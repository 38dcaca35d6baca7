from __future__ import annotations

import json

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse

from homegame.api.chips import router as chips_router
from homegame.api.settlement import router as settlement_router
from homegame.config import settings
from homegame.logging_config import setup_logging

setup_logging(settings.LOG_LEVEL)

app = FastAPI(title=settings.APP_NAME, version=settings.APP_VERSION)
if settings.cors_origins:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
app.include_router(chips_router)
app.include_router(settlement_router)


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok", "version": settings.APP_VERSION}


@app.get("/", response_class=HTMLResponse)
def frontend() -> str:
    defaults = {
        "denominations": settings.default_denominations,
        "buyIn": settings.DEFAULT_BUY_IN,
        "smallBlind": settings.DEFAULT_SMALL_BLIND,
        "bigBlind": settings.DEFAULT_BIG_BLIND,
    }
    return PAGE.replace("__TITLE__", settings.APP_NAME).replace("__DEFAULTS__", json.dumps(defaults))


PAGE = """
<!doctype html>
<html lang="en">
<head>
  <meta charset="UTF-8" />
  <title>__TITLE__</title>
  <style>
    body { font-family: sans-serif; max-width: 760px; margin: 2rem auto; }
    .card { border: 1px solid #ddd; border-radius: 8px; padding: 1rem; margin-bottom: 1rem; }
    .hidden { display:none; }
    .tabs button.active { font-weight: bold; }
    table { width: 100%; border-collapse: collapse; }
    td, th { padding: 0.25rem; text-align: right; }
    td:first-child, th:first-child { text-align: left; }
    .profit { color: #16a34a; } .loss { color: #dc2626; } .warn { color: #d97706; }
    button { padding: 0.4rem 0.8rem; }
  </style>
</head>
<body>
  <h1>__TITLE__</h1>
  <div class="tabs">
    <button data-tab="chips" class="active">Chips</button>
    <button data-tab="settle">Settle up</button>
  </div>

  <div id="chips" class="card">
    <form id="chipsForm">
      <label>Denominations (comma separated): <input id="denominations" required /></label><br/><br/>
      <label>Small blind ($): <input id="smallBlind" type="number" step="any" min="0" /></label>
      <label>Big blind ($): <input id="bigBlind" type="number" step="any" min="0" /></label><br/><br/>
      <label>Buy-in per player ($): <input id="buyIn" type="number" step="any" min="0" required /></label><br/><br/>
      <button type="submit">Calculate distributions</button>
    </form>
    <div id="combinations"></div>
  </div>

  <div id="settle" class="card hidden">
    <div id="players"></div>
    <button id="addPlayer">Add player</button>
    <button id="settleButton">Calculate settlements</button>
    <div id="settlement"></div>
  </div>

<script>
const DEFAULTS = __DEFAULTS__;

function escapeHtml(text) {
  return String(text)
    .replaceAll("&", "&amp;")
    .replaceAll("<", "&lt;")
    .replaceAll(">", "&gt;")
    .replaceAll('"', "&quot;")
    .replaceAll("'", "&#39;");
}

function dollar(n) {
  const v = Math.abs(n);
  return Number.isInteger(v) ? `$${v}` : `$${v.toFixed(2)}`;
}

async function postJson(url, body) {
  const res = await fetch(url, {
    method: "POST",
    headers: { "Content-Type": "application/json" },
    body: JSON.stringify(body)
  });
  const data = await res.json();
  if (!res.ok) {
    const detail = data.detail;
    throw new Error(typeof detail === "string" ? detail : (detail.message || JSON.stringify(detail)));
  }
  return data;
}

document.querySelectorAll(".tabs button").forEach(btn => btn.addEventListener("click", () => {
  document.querySelectorAll(".tabs button").forEach(b => b.classList.toggle("active", b === btn));
  document.getElementById("chips").classList.toggle("hidden", btn.dataset.tab !== "chips");
  document.getElementById("settle").classList.toggle("hidden", btn.dataset.tab !== "settle");
}));

document.getElementById("denominations").value = DEFAULTS.denominations.join(",");
document.getElementById("buyIn").value = DEFAULTS.buyIn;
document.getElementById("smallBlind").value = DEFAULTS.smallBlind;
document.getElementById("bigBlind").value = DEFAULTS.bigBlind;

function renderCombination(combo) {
  const rows = combo.allocations.map(a =>
    `<tr><td>${a.denomination}</td><td>${dollar(a.value_per_chip)}</td><td>${a.quantity}</td><td>${dollar(a.total_value)}</td></tr>`
  ).join("");
  const status = combo.is_exact ? "" : ` <span class="warn">(${combo.difference > 0 ? "+" : "-"}${dollar(combo.difference)} vs target)</span>`;
  return `<div class="card"><h3>${escapeHtml(combo.name)}: ${dollar(combo.actual_total)}${status}</h3>
    <p>${combo.total_chips} chips per player</p>
    <table><tr><th>Chip</th><th>Worth</th><th>Qty</th><th>Subtotal</th></tr>${rows}</table></div>`;
}

document.getElementById("chipsForm").addEventListener("submit", async (e) => {
  e.preventDefault();
  const box = document.getElementById("combinations");
  const sb = document.getElementById("smallBlind").value;
  const bb = document.getElementById("bigBlind").value;
  const payload = {
    denominations: document.getElementById("denominations").value.split(",").map(Number).filter(v => v > 0),
    buy_in: Number(document.getElementById("buyIn").value)
  };
  if (sb && bb) {
    payload.small_blind = Number(sb);
    payload.big_blind = Number(bb);
  }
  try {
    const data = await postJson("/chips/distribution", payload);
    box.innerHTML = data.found
      ? data.combinations.map(renderCombination).join("")
      : `<p class="warn">Couldn't find valid distributions with these settings. Try adjusting the buy-in or blinds.</p>`;
  } catch (err) {
    box.innerHTML = `<p class="loss">${escapeHtml(err.message)}</p>`;
  }
});

function addPlayerRow() {
  const row = document.createElement("div");
  row.className = "player";
  row.innerHTML = `<input class="name" placeholder="Player name" />
    Buy-ins: <input class="buyIns" placeholder="20, 20" />
    Final balance: <input class="final" type="number" step="any" min="0" value="0" />`;
  document.getElementById("players").appendChild(row);
}

document.getElementById("addPlayer").addEventListener("click", addPlayerRow);

document.getElementById("settleButton").addEventListener("click", async () => {
  const box = document.getElementById("settlement");
  const players = [...document.querySelectorAll("#players .player")].map(row => ({
    name: row.querySelector(".name").value,
    buy_ins: row.querySelector(".buyIns").value.split(",").map(Number).filter(v => !Number.isNaN(v)),
    final_balance: Number(row.querySelector(".final").value) || 0
  }));
  try {
    const data = await postJson("/settlement", { players });
    const summary = data.summaries.map(s =>
      `<tr><td>${escapeHtml(s.name)}</td><td>${dollar(s.total_buy_in)}</td><td>${dollar(s.final_balance)}</td>
       <td class="${s.outcome}">${s.outcome === "even" ? "even" : (s.net > 0 ? "+" : "-") + dollar(s.net)}</td></tr>`
    ).join("");
    const payments = data.transactions.length
      ? data.transactions.map(t => `<li>${escapeHtml(t.from)} &rarr; ${escapeHtml(t.to)}: ${dollar(t.amount)}</li>`).join("")
      : "<li>Everyone is even, no payments needed!</li>";
    const warning = data.imbalance
      ? `<p class="warn">Cash-outs differ from buy-ins by ${dollar(data.imbalance)}.</p>` : "";
    box.innerHTML = `<table><tr><th>Player</th><th>Buy-in</th><th>Cash-out</th><th>Net</th></tr>${summary}</table>
      ${warning}<ul>${payments}</ul>`;
  } catch (err) {
    box.innerHTML = `<p class="loss">${escapeHtml(err.message)}</p>`;
  }
});

addPlayerRow();
addPlayerRow();
</script>
</body>
</html>
"""
