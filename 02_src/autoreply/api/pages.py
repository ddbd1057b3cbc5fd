"""HTML pages for the admin area."""

import html
import json

from ..models import DEFAULT_WELCOME, MAX_DELAY_SECONDS
from ..source import DM_MAX_GRAPHEMES

SETUP_TITLE = "DM Reply Bot Setup"

_STYLE = """
    * { box-sizing: border-box; }
    body { font-family: system-ui, sans-serif; max-width: 560px; margin: 2rem auto; padding: 1rem; }
    h1 { font-size: 1.25rem; margin-bottom: 0.5rem; }
    .card { border: 1px solid #ddd; border-radius: 8px; padding: 1rem; margin-bottom: 1rem; }
    label { display: block; margin-bottom: 0.25rem; font-weight: 500; font-size: 0.9rem; }
    input, textarea { width: 100%; padding: 0.5rem; margin-bottom: 0.75rem; border: 1px solid #ccc; border-radius: 4px; font-family: inherit; }
    input[type="checkbox"] { width: auto; }
    textarea { min-height: 100px; resize: vertical; }
    button { padding: 0.5rem 1rem; background: #0085ff; color: white; border: none; border-radius: 4px; cursor: pointer; }
    .error { color: #c00; font-size: 0.9rem; }
    .status { font-size: 0.85rem; color: #080; }
"""


def _page(title: str, body: str) -> str:
    return f"""<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1">
  <title>{html.escape(title)}</title>
  <style>{_STYLE}</style>
</head>
<body>
{body}
</body>
</html>"""


def setup_page(base_url: str) -> str:
    """One-time setup wizard."""
    admin_url = json.dumps(f"{base_url}/admin")
    default_msg = html.escape(DEFAULT_WELCOME)
    return _page(
        SETUP_TITLE,
        f"""  <h1>{SETUP_TITLE}</h1>
  <div class="card">
    <label for="password">Admin password (min 8 characters)</label>
    <input type="password" id="password" autocomplete="new-password">
    <label for="welcome">Auto-reply message</label>
    <textarea id="welcome">{default_msg}</textarea>
    <label for="delay">Delay before sending (0-{MAX_DELAY_SECONDS} seconds)</label>
    <input type="number" id="delay" min="0" max="{MAX_DELAY_SECONDS}" value="0">
    <label><input type="checkbox" id="enabled"> Enable the flow now</label>
  </div>
  <div id="error" class="error"></div>
  <button id="saveBtn">Complete setup</button>
  <script>
    const adminUrl = {admin_url};
    document.getElementById('saveBtn').addEventListener('click', async () => {{
      const errEl = document.getElementById('error');
      const res = await fetch(adminUrl + '/api/setup', {{
        method: 'POST',
        headers: {{ 'Content-Type': 'application/json' }},
        body: JSON.stringify({{
          admin_password: document.getElementById('password').value,
          welcome_message: document.getElementById('welcome').value,
          enabled: document.getElementById('enabled').checked,
          message_delay_seconds: Number(document.getElementById('delay').value) || 0
        }})
      }});
      if (res.ok) {{ window.location.href = adminUrl; return; }}
      const data = await res.json();
      errEl.textContent = data.error || 'Setup failed';
    }});
  </script>""",
    )


def login_page(base_url: str) -> str:
    """Password form."""
    admin_url = json.dumps(f"{base_url}/admin")
    return _page(
        "Admin Login",
        f"""  <h1>Admin Login</h1>
  <form id="loginForm">
    <label for="password">Password</label>
    <input type="password" id="password" autocomplete="current-password">
    <div id="error" class="error"></div>
    <button type="submit">Sign in</button>
  </form>
  <script>
    const adminUrl = {admin_url};
    document.getElementById('loginForm').addEventListener('submit', async (e) => {{
      e.preventDefault();
      const res = await fetch(adminUrl + '/login', {{
        method: 'POST',
        headers: {{ 'Content-Type': 'application/json' }},
        body: JSON.stringify({{ password: document.getElementById('password').value }}),
        redirect: 'manual'
      }});
      if (res.type === 'opaqueredirect' || res.status === 302) {{ window.location.href = adminUrl; return; }}
      const data = await res.json();
      document.getElementById('error').textContent = data.error || 'Login failed';
    }});
  </script>""",
    )


def admin_page(base_url: str) -> str:
    """Configuration form for a logged-in operator."""
    admin_url = json.dumps(f"{base_url}/admin")
    return _page(
        "DM Reply Bot Admin",
        f"""  <h1>DM Reply Bot</h1>
  <div class="card">
    <label><input type="checkbox" id="enabled"> Flow enabled</label>
    <label for="delay">Delay before sending (0-{MAX_DELAY_SECONDS} seconds)</label>
    <input type="number" id="delay" min="0" max="{MAX_DELAY_SECONDS}">
    <label for="cap">Max replies per cycle (empty = no limit)</label>
    <input type="number" id="cap" min="1">
    <label for="welcome">Auto-reply message (max {DM_MAX_GRAPHEMES} characters)</label>
    <textarea id="welcome"></textarea>
  </div>
  <button id="saveBtn">Save changes</button>
  <a href="/admin/logout">Log out</a>
  <div id="status" class="status"></div>
  <script>
    const adminUrl = {admin_url};
    async function load() {{
      const res = await fetch(adminUrl + '/api/config');
      if (res.status === 401) {{ window.location.reload(); return; }}
      const data = await res.json();
      document.getElementById('welcome').value = data.welcome_message;
      document.getElementById('delay').value = data.message_delay_seconds;
      document.getElementById('cap').value = data.per_cycle_send_cap ?? '';
      document.getElementById('enabled').checked = data.enabled;
    }}
    document.getElementById('enabled').addEventListener('change', async (e) => {{
      await fetch(adminUrl + '/api/toggle', {{
        method: 'POST',
        headers: {{ 'Content-Type': 'application/json' }},
        body: JSON.stringify({{ enabled: e.target.checked }})
      }});
    }});
    document.getElementById('saveBtn').addEventListener('click', async () => {{
      const cap = document.getElementById('cap').value;
      const res = await fetch(adminUrl + '/api/config', {{
        method: 'POST',
        headers: {{ 'Content-Type': 'application/json' }},
        body: JSON.stringify({{
          welcome_message: document.getElementById('welcome').value,
          message_delay_seconds: Number(document.getElementById('delay').value) || 0,
          per_cycle_send_cap: cap === '' ? null : Number(cap)
        }})
      }});
      const data = await res.json();
      document.getElementById('status').textContent = res.ok ? 'Saved.' : (data.error || 'Save failed');
    }});
    load();
  </script>""",
    )
