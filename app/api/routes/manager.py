"""Manager Dashboard — single HTML page to drive instances from a browser.

Invariants:
    - Every instance-derived value is HTML-escaped (names are caller-chosen)
    - The page only calls the public JSON endpoints; it holds no state
"""

import html
import json

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse

from app.api.dependencies import get_gateway
from app.core.instance import Instance
from app.services.instance_gateway import InstanceGateway

router = APIRouter(tags=["manager"])

_STYLE = """
body { font-family: Arial, sans-serif; margin: 0; padding: 20px; background: #f5f5f5; }
.container { max-width: 800px; margin: 0 auto; background: white; padding: 30px;
             border-radius: 10px; box-shadow: 0 2px 10px rgba(0,0,0,0.1); }
h1 { color: #25D366; text-align: center; margin-bottom: 30px; }
.status { background: #e8f5e8; padding: 15px; border-radius: 5px; margin: 20px 0;
          border-left: 4px solid #25D366; }
.info { background: #f0f8ff; padding: 15px; border-radius: 5px; margin: 20px 0;
        border-left: 4px solid #007acc; }
.instance-card { background: #f9f9f9; padding: 15px; margin: 10px 0; border-radius: 5px;
                 border: 1px solid #ddd; }
.btn { background: #25D366; color: white; padding: 10px 20px; border: none;
       border-radius: 5px; cursor: pointer; margin: 5px; }
.btn:hover { background: #1ea853; }
.btn-danger { background: #dc3545; }
.btn-danger:hover { background: #c82333; }
"""

_SCRIPT = """
function createInstance() {
    const name = prompt('Enter instance name:') || %(default_name)s;
    fetch('/instance/create', {
        method: 'POST',
        headers: { 'Content-Type': 'application/json' },
        body: JSON.stringify({ instanceName: name })
    })
    .then(res => res.json())
    .then(() => { alert('Instance created: ' + name); location.reload(); })
    .catch(err => alert('Error: ' + err.message));
}

function connectInstance(id) {
    fetch('/instance/connect/' + encodeURIComponent(id), { method: 'POST' })
    .then(res => res.json())
    .then(data => {
        if (data.qr) {
            const win = window.open('', '_blank');
            win.document.write('<h2>Scan this QR code with WhatsApp:</h2>' +
                '<img src="' + data.qr + '" style="max-width: 400px;">');
        }
    })
    .catch(err => alert('Error: ' + err.message));
}

function deleteInstance(id) {
    if (confirm('Delete instance ' + id + '?')) {
        fetch('/instance/delete/' + encodeURIComponent(id), { method: 'DELETE' })
        .then(() => location.reload());
    }
}
"""


def _instance_card(instance: Instance) -> str:
    name = html.escape(instance.id)
    # json.dumps gives a JS string literal; escape again for the attribute context
    js_id = html.escape(json.dumps(instance.id), quote=True)
    phone = html.escape(instance.phone) if instance.is_connected and instance.phone else "Not connected"
    return (
        '<div class="instance-card">'
        f"<strong>Instance:</strong> {name}<br>"
        f"<strong>Status:</strong> {html.escape(instance.status.value)}<br>"
        f"<strong>Phone:</strong> {phone}<br>"
        f'<button class="btn" onclick="connectInstance({js_id})">Connect</button>'
        f'<button class="btn btn-danger" onclick="deleteInstance({js_id})">Delete</button>'
        "</div>"
    )


def render_manager_page(
    host: str, instances: list[Instance], default_name: str,
) -> str:
    cards = "".join(_instance_card(i) for i in instances)
    script = _SCRIPT % {"default_name": json.dumps(default_name)}
    return f"""<!DOCTYPE html>
<html>
<head>
    <title>Evolution API Manager</title>
    <meta name="viewport" content="width=device-width, initial-scale=1">
    <style>{_STYLE}</style>
</head>
<body>
    <div class="container">
        <h1>Evolution API Manager</h1>
        <div class="status">
            <strong>Status:</strong> Evolution API is running successfully<br>
            <strong>Server:</strong> {html.escape(host)}<br>
            <strong>Instances:</strong> {len(instances)} active
        </div>
        <div class="info">
            <h3>Quick Setup Guide</h3>
            <ol>
                <li>Create a WhatsApp instance below</li>
                <li>Scan the QR code with WhatsApp</li>
                <li>Configure webhook URL for n8n integration</li>
                <li>Test message sending</li>
            </ol>
        </div>
        <div class="instances">
            <h3>WhatsApp Instances</h3>
            <button class="btn" onclick="createInstance()">+ Create New Instance</button>
            <div id="instance-list">{cards}</div>
        </div>
    </div>
    <script>{script}</script>
</body>
</html>"""


@router.get("/manager", response_class=HTMLResponse)
async def manager(request: Request, gateway: InstanceGateway = Depends(get_gateway)):
    """Browser dashboard listing every instance."""
    host = request.headers.get("host", "")
    return render_manager_page(
        host, gateway.list_instances(), gateway.registry.default_instance_id,
    )
