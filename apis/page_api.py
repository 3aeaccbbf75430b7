import html
import json

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse

from config.categories import FOOD_CATEGORIES
from config.settings import LandingConfig

router = APIRouter(tags=["Page"])

MAP_LOAD_ERROR = "Ошибка загрузки карты"

STATUS_PAGE = """
<!DOCTYPE html>
<html lang="ru">
<head>
  <meta charset="utf-8"/>
  <title>{title}</title>
  <style>
    html, body {{ height: 100%; margin: 0; font-family: sans-serif; }}
    body {{ display: flex; align-items: center; justify-content: center; text-align: center; }}
    h1 {{ font-size: 2.25rem; margin-bottom: 1rem; }}
    a {{ color: #3b82f6; }}
    button {{ background: #3b82f6; color: white; border: 0; border-radius: 4px; padding: .5rem 1rem; cursor: pointer; }}
  </style>
</head>
<body>
  <div>
{body}
  </div>
</body>
</html>
"""


def not_found_page() -> HTMLResponse:
    body = """    <h1>404</h1>
    <p>Страница не найдена</p>
    <a href="/">Вернуться на главную</a>"""
    return HTMLResponse(STATUS_PAGE.format(title="404", body=body), status_code=404)


def error_page(status_code: int = 500) -> HTMLResponse:
    body = """    <h1>Что-то пошло не так</h1>
    <button onclick="window.location.reload()">Попробовать снова</button>"""
    return HTMLResponse(
        STATUS_PAGE.format(title="Что-то пошло не так", body=body), status_code=status_code
    )


def _map_section(api_key: str) -> str:
    if not api_key:
        return f"""
<section id="map-column" class="map-error">
  <div class="error">{MAP_LOAD_ERROR}: API key is not configured</div>
</section>"""

    return f"""
<section id="map-column">
  <div id="search-box">
    <input id="search-input" type="text" placeholder="Поиск места..." autocomplete="off"/>
    <ul id="suggestions"></ul>
  </div>
  <div id="map"><div class="loading">Загрузка карты...</div></div>
</section>
<script>
  window.gm_authFailure = () => {{
    document.getElementById("map-column").innerHTML =
      '<div class="error">{MAP_LOAD_ERROR}</div>';
  }};
</script>
<script
  src="https://maps.googleapis.com/maps/api/js?key={html.escape(api_key)}&callback=initMap"
  async defer onerror="window.gm_authFailure()">
</script>"""


@router.get("/", response_class=HTMLResponse)
def render_landing(request: Request):
    api_key = request.app.state.maps_client.api_key
    categories = json.dumps(list(FOOD_CATEGORIES), ensure_ascii=False)

    return f"""
<!DOCTYPE html>
<html lang="ru">
<head>
  <meta charset="utf-8"/>
  <title>Geometr</title>
  <style>
    html, body {{ height: 100%; margin: 0; font-family: sans-serif; }}
    main {{ display: flex; height: 100%; }}
    #map-column {{ width: 50%; position: relative; }}
    #map {{ width: 100%; height: 100%; }}
    #search-box {{ position: absolute; top: 1rem; left: 50%; transform: translateX(-50%); width: 400px; z-index: 10; }}
    #search-input {{ width: 100%; padding: .6rem; border: 1px solid #e2e8f0; border-radius: 4px; }}
    #suggestions {{ list-style: none; margin: 0; padding: 0; background: white; }}
    #suggestions li {{ padding: .5rem 1rem; cursor: pointer; }}
    #form-column {{ width: 50%; background: #f9fafb; overflow-y: auto; display: flex; justify-content: center; padding: 2rem; box-sizing: border-box; }}
    .error {{ color: #ef4444; margin: auto; padding: 2rem; }}
    .helper {{ color: #dc2626; font-size: .8rem; }}
    #categories {{ max-height: 300px; overflow-y: auto; background: #f3f4f6; padding: 1rem; }}
    #submit {{ width: 100%; padding: .8rem; background: #4CAF50; color: white; border: 0; }}
    #submit:disabled {{ background: #ccc; }}
    dialog {{ border: 0; border-radius: 8px; }}
  </style>
</head>
<body>
<main>
{_map_section(api_key)}
<section id="form-column">
  <form id="contact-form" style="max-width: 28rem; width: 100%">
    <h2>Получить доступ к дашборду</h2>
    <label>Место <input id="place" type="text"/></label>
    <p class="helper" id="place-error"></p>
    <h3>Категории общественного питания</h3>
    <div id="categories"></div>
    <p class="helper" id="categories-error"></p>
    <label>Email <input id="email" type="email"/></label>
    <p class="helper" id="email-error"></p>
    <button id="submit" type="submit" disabled>{LandingConfig.PRICE_LABEL}</button>
    <p style="font-size: .75rem; color: #6b7280">
      Нажимая кнопку «{LandingConfig.PRICE_LABEL}», вы принимаете условия
      <a href="{LandingConfig.TERMS_URL}" target="_blank" rel="noopener noreferrer">использования платформы</a>
    </p>
  </form>
</section>
</main>

<dialog id="confirmation">
  <h3>Спасибо за заявку!</h3>
  <p>Мы свяжемся с вами в ближайшее время для подтверждения заявки.</p>
  <button id="dismiss">Закрыть</button>
</dialog>

<script>
const CATEGORIES = {categories};
const API = "/api/landing";
let sessionId = null, map = null, marker = null, infoWindow = null;
let appliedViewport = null, appliedPlace = null;

async function call(method, path, body) {{
  const resp = await fetch(`${{API}}/sessions/${{sessionId}}${{path}}`, {{
    method, headers: {{ "Content-Type": "application/json" }},
    body: body === undefined ? undefined : JSON.stringify(body),
  }});
  const payload = await resp.json();
  if (!payload.success) {{ console.error(payload.error); return null; }}
  render(payload.data);
  return payload.data;
}}

function scroll(directive) {{
  if (!directive) return;
  if (directive.target === "top") window.scrollTo({{ top: 0, behavior: directive.behavior }});
  else document.querySelector(directive.target)?.scrollIntoView({{ behavior: directive.behavior }});
}}

function renderPicker(picker) {{
  const list = document.getElementById("suggestions");
  if (!list) return;
  list.innerHTML = "";
  picker.suggestions.forEach(s => {{
    const li = document.createElement("li");
    li.textContent = s.description;
    li.onclick = () => call("POST", "/select", s);
    list.appendChild(li);
  }});
  const input = document.getElementById("search-input");
  if (document.activeElement !== input) input.value = picker.query;
  if (!map) return;
  // Leave a panned map and an open overlay alone unless the server state moved
  const viewport = JSON.stringify(picker.viewport);
  if (viewport !== appliedViewport) {{
    map.setCenter(picker.viewport.center);
    map.setZoom(picker.viewport.zoom);
    appliedViewport = viewport;
  }}
  const place = JSON.stringify(picker.selected_place);
  if (place === appliedPlace) return;
  appliedPlace = place;
  if (marker) {{ marker.setMap(null); marker = null; }}
  if (infoWindow) {{ infoWindow.close(); infoWindow = null; }}
  if (picker.info_window_open) {{
    const pos = picker.selected_place.coordinates;
    marker = new google.maps.Marker({{ position: pos, map }});
    const content = document.createElement("div");
    const text = document.createElement("p");
    text.textContent = picker.selected_place.address;
    const btn = document.createElement("button");
    btn.textContent = "Получить дашборд";
    btn.onclick = () => call("POST", "/explore");
    content.append(text, btn);
    infoWindow = new google.maps.InfoWindow({{ position: pos, content, maxWidth: 350 }});
    infoWindow.addListener("closeclick", () => call("POST", "/info-window/close"));
    infoWindow.open(map);
  }}
}}

function renderForm(form) {{
  const place = document.getElementById("place");
  if (document.activeElement !== place) place.value = form.draft.place;
  const email = document.getElementById("email");
  if (document.activeElement !== email) email.value = form.draft.email;
  CATEGORIES.forEach(name => {{
    document.querySelector(`input[data-category="${{name}}"]`).checked = form.draft.categories[name];
  }});
  document.getElementById("place-error").textContent = form.errors.place || "";
  document.getElementById("email-error").textContent = form.errors.email || "";
  document.getElementById("categories-error").textContent = form.errors.categories || "";
  document.getElementById("submit").disabled = !form.can_submit;
  const dialog = document.getElementById("confirmation");
  if (form.dialog_open && !dialog.open) dialog.showModal();
  if (!form.dialog_open && dialog.open) dialog.close();
}}

function render(state) {{
  renderPicker(state.picker);
  renderForm(state.form);
  scroll(state.scroll);
}}

function initMap() {{
  map = new google.maps.Map(document.getElementById("map"), {{
    center: {{ lat: {LandingConfig.DEFAULT_CENTER_LAT}, lng: {LandingConfig.DEFAULT_CENTER_LNG} }},
    zoom: {LandingConfig.DEFAULT_ZOOM},
    zoomControl: true,
  }});
  map.addListener("click", e => call("POST", "/click", {{ lat: e.latLng.lat(), lng: e.latLng.lng() }}));
  if (sessionId) call("GET", "");
}}

document.addEventListener("DOMContentLoaded", async () => {{
  const box = document.getElementById("categories");
  CATEGORIES.forEach(name => {{
    const label = document.createElement("label");
    const cb = document.createElement("input");
    cb.type = "checkbox";
    cb.dataset.category = name;
    cb.onchange = () => call("POST", `/form/categories/${{encodeURIComponent(name)}}/toggle`);
    label.append(cb, " " + name);
    box.append(label, document.createElement("br"));
  }});
  document.getElementById("place").oninput = e => call("PUT", "/form/place", {{ value: e.target.value }});
  document.getElementById("email").oninput = e => call("PUT", "/form/email", {{ value: e.target.value }});
  document.getElementById("contact-form").onsubmit = e => {{ e.preventDefault(); call("POST", "/form/submit"); }};
  document.getElementById("dismiss").onclick = () => call("POST", "/form/dismiss");
  document.getElementById("confirmation").addEventListener("cancel", e => {{ e.preventDefault(); call("POST", "/form/dismiss"); }});
  const search = document.getElementById("search-input");
  if (search) search.oninput = e => call("POST", "/search", {{ query: e.target.value }});

  const resp = await fetch(`${{API}}/sessions`, {{ method: "POST" }});
  const payload = await resp.json();
  sessionId = payload.data.session_id;
  render(payload.data);
}});
</script>
</body>
</html>
"""
