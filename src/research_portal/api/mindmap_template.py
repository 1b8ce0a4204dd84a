MINDMAP_HTML = """
<!DOCTYPE html>
<html>
<head>
    <meta charset="utf-8">
    <title>Research Portal - Mind Map</title>
    <style>
        * { margin: 0; padding: 0; box-sizing: border-box; }
        body { background: #05060d; font-family: -apple-system, sans-serif; overflow: hidden; color: #c9d1d9; }
        #canvas { width: 100vw; height: 100vh; display: block; cursor: grab; }
        #canvas.dragging { cursor: grabbing; }

        #info { position: absolute; top: 16px; left: 16px; z-index: 10; pointer-events: none; }
        #info .brand { font-size: 24px; font-weight: 700; color: #5eead4; letter-spacing: 2px; }
        #info h1 { font-size: 11px; color: #5eead480; font-weight: 400; text-transform: uppercase; letter-spacing: 3px; margin-top: 6px; }

        #controls {
            position: absolute; bottom: 16px; left: 16px;
            background: rgba(10,10,18,0.95); padding: 10px 14px;
            border-radius: 8px; border: 1px solid #1a1a2e;
            font-size: 11px; z-index: 100; display: flex; gap: 8px; align-items: center;
        }
        .toggle-btn {
            padding: 6px 12px; background: #0f0f1a; border: 1px solid #1a1a2e;
            border-radius: 4px; color: #8b949e; cursor: pointer; font-size: 11px;
        }
        .toggle-btn:hover { border-color: #5eead4; color: #5eead4; }
        .toggle-btn:disabled { opacity: 0.35; cursor: default; border-color: #1a1a2e; color: #8b949e; }
        #zoom-readout { min-width: 44px; text-align: center; color: #5eead4; }

        #pending {
            position: absolute; bottom: 16px; right: 16px;
            background: rgba(10,10,18,0.95); padding: 10px 14px;
            border-radius: 8px; border: 1px solid #1a1a2e; font-size: 11px;
            z-index: 100; display: none; gap: 8px; align-items: center;
        }
        #pending.visible { display: flex; }

        #loading { position: absolute; top: 16px; left: 50%; transform: translateX(-50%); color: #5eead4; font-size: 12px; z-index: 10; display: none; }
        #loading.visible { display: block; }

        #detail {
            position: absolute; top: 16px; right: 16px; width: 380px; max-height: 80vh; overflow-y: auto;
            background: rgba(10,10,18,0.97); border: 1px solid #1a1a2e; border-radius: 8px;
            padding: 16px; font-size: 12px; z-index: 100; display: none;
        }
        #detail.visible { display: block; }
        #detail h2 { font-size: 14px; color: #e0e0ff; margin-bottom: 10px; }
        #detail .row { margin: 6px 0; }
        #detail .key { color: #5eead480; text-transform: uppercase; font-size: 10px; letter-spacing: 1px; }
        #detail .close { float: right; cursor: pointer; color: #8b949e; }
        .tag { display: inline-block; padding: 2px 6px; margin: 2px; border-radius: 4px; background: #5eead420; color: #5eead4; font-size: 10px; }

        .node rect { stroke-width: 1.5; cursor: pointer; }
        .node text { fill: #e0e0ff; font-size: 12px; pointer-events: none; }
        .node .type { fill: #8b949e; font-size: 9px; text-transform: uppercase; letter-spacing: 1px; }
        .node.selected rect { stroke: #5eead4 !important; stroke-width: 3; }
        .node.expanding rect { stroke-dasharray: 4 3; }
        .edge { fill: none; stroke: #30363d; stroke-width: 1.5; }
    </style>
</head>
<body>
    <svg id="canvas"><g id="scene"><g id="edges"></g><g id="nodes"></g></g></svg>

    <div id="info">
        <div class="brand">RESEARCH</div>
        <h1>Thesis mind map</h1>
    </div>

    <div id="loading">Loading...</div>

    <div id="controls">
        <button class="toggle-btn" id="zoom-out" title="Zoom out">-</button>
        <span id="zoom-readout">100%</span>
        <button class="toggle-btn" id="zoom-in" title="Zoom in">+</button>
        <button class="toggle-btn" id="fit" title="Fit view">Fit</button>
        <button class="toggle-btn" id="collapse-all" title="Collapse all (Esc)">Collapse all</button>
    </div>

    <div id="pending">
        <span id="pending-text"></span>
        <button class="toggle-btn" id="next-batch">Next 5</button>
        <button class="toggle-btn" id="show-all">Show All</button>
    </div>

    <div id="detail"></div>

    <script>
        const COLORS = {
            root: '#5eead4', category: '#a78bfa', collection: '#60a5fa',
            professor: '#f472b6', student: '#fbbf24', thesis: '#34d399',
        };
        const NODE_W = 180, NODE_H = 70;

        let sessionId = null;
        let state = null;
        let view = { zoom: 1, panX: 0, panY: 0, pollIntervalMs: 100 };
        let busy = false;

        const svg = document.getElementById('canvas');
        const scene = document.getElementById('scene');

        async function api(method, path, body) {
            const res = await fetch(`/mindmap/sessions${path}`, {
                method,
                headers: body ? { 'Content-Type': 'application/json' } : {},
                body: body ? JSON.stringify(body) : undefined,
            });
            if (!res.ok) {
                const err = await res.json().catch(() => ({}));
                throw new Error(err.detail || res.statusText);
            }
            return res.json();
        }

        function applyState(data) {
            state = data;
            if (data.viewport) view = data.viewport;
            render();
        }

        function applyTransform() {
            scene.setAttribute('transform', `translate(${view.panX},${view.panY}) scale(${view.zoom})`);
        }

        function truncate(label, max) {
            return label.length > max ? label.slice(0, max - 1) + '\\u2026' : label;
        }

        function render() {
            const byId = Object.fromEntries(state.nodes.map(n => [n.id, n]));
            const edges = document.getElementById('edges');
            const nodes = document.getElementById('nodes');
            edges.innerHTML = '';
            nodes.innerHTML = '';

            for (const e of state.edges) {
                const s = byId[e.source], t = byId[e.target];
                if (!s || !t) continue;
                const x1 = s.position.x + NODE_W, y1 = s.position.y;
                const x2 = t.position.x, y2 = t.position.y;
                const mx = (x1 + x2) / 2;
                const path = document.createElementNS('http://www.w3.org/2000/svg', 'path');
                path.setAttribute('class', 'edge');
                path.setAttribute('d', `M${x1},${y1} C${mx},${y1} ${mx},${y2} ${x2},${y2}`);
                edges.appendChild(path);
            }

            for (const n of state.nodes) {
                const g = document.createElementNS('http://www.w3.org/2000/svg', 'g');
                const classes = ['node'];
                if (n.selected) classes.push('selected');
                if (state.expanding.includes(n.id)) classes.push('expanding');
                g.setAttribute('class', classes.join(' '));
                g.setAttribute('transform', `translate(${n.position.x},${n.position.y - NODE_H / 2})`);

                const color = COLORS[n.nodeType] || '#8b949e';
                g.innerHTML = `
                    <rect width="${NODE_W}" height="${NODE_H}" rx="8"
                          fill="${color}18" stroke="${color}"></rect>
                    <text class="type" x="12" y="20">${n.nodeType}${n.expanded ? ' \\u25be' : ''}</text>
                    <text x="12" y="44"></text>`;
                g.querySelector('text:last-child').textContent = truncate(n.label, 24);
                g.addEventListener('click', ev => { ev.stopPropagation(); clickNode(n.id); });
                nodes.appendChild(g);
            }

            const pending = document.getElementById('pending');
            if (state.pending) {
                const parent = byId[state.pending.parentId];
                document.getElementById('pending-text').textContent =
                    `${state.pending.remaining} more under ${parent ? truncate(parent.label, 20) : state.pending.parentId}`;
                pending.classList.add('visible');
            } else {
                pending.classList.remove('visible');
            }

            document.getElementById('loading').classList.toggle('visible', state.loading || busy);
            applyTransform();
        }

        function showDetail(thesis) {
            const el = document.getElementById('detail');
            if (!thesis) { el.classList.remove('visible'); return; }
            const rows = [
                ['Author', thesis.dc_contributor_author],
                ['Advisor', thesis.dc_contributor_advisor],
                ['Date', thesis.dc_date_issued],
                ['Type', thesis.dc_type],
                ['Publisher', thesis.dc_publisher],
            ].filter(([, v]) => v);
            el.innerHTML = '<span class="close">\\u2715</span><h2></h2>';
            el.querySelector('h2').textContent = thesis.dc_title || 'Untitled Thesis';
            for (const [k, v] of rows) {
                const row = document.createElement('div');
                row.className = 'row';
                row.innerHTML = `<div class="key">${k}</div><div></div>`;
                row.lastChild.textContent = v;
                el.appendChild(row);
            }
            for (const subject of (thesis.dc_subject || '').split('||').filter(Boolean)) {
                const tag = document.createElement('span');
                tag.className = 'tag';
                tag.textContent = subject.trim();
                el.appendChild(tag);
            }
            if (thesis.dc_description_abstract) {
                const abs = document.createElement('p');
                abs.className = 'row';
                abs.textContent = thesis.dc_description_abstract;
                el.appendChild(abs);
            }
            el.querySelector('.close').addEventListener('click', () => showDetail(null));
            el.classList.add('visible');
        }

        async function run(action) {
            busy = true;
            if (state) render();
            try {
                return await action();
            } catch (e) {
                console.error(e);
            } finally {
                busy = false;
                if (state) render();
            }
        }

        async function clickNode(nodeId) {
            // The server tracks in-flight expansions; render the dashed outline right away.
            if (state && !state.expanding.includes(nodeId)) state.expanding.push(nodeId);
            render();
            const data = await run(() => api('POST', `/${sessionId}/nodes/${encodeURIComponent(nodeId)}/click`));
            if (!data) return;
            applyState(data);
            showDetail(data.detail);
        }

        async function post(path) {
            const data = await run(() => api('POST', `/${sessionId}${path}`));
            if (data) applyState(data);
        }

        async function viewportCommand(cmd) {
            const data = await run(() => api('POST', `/${sessionId}/viewport/${cmd}`));
            if (data) { view = data; applyTransform(); }
        }

        document.getElementById('zoom-in').addEventListener('click', () => viewportCommand('zoom-in'));
        document.getElementById('zoom-out').addEventListener('click', () => viewportCommand('zoom-out'));
        document.getElementById('fit').addEventListener('click', () => viewportCommand('fit'));
        document.getElementById('collapse-all').addEventListener('click', () => { showDetail(null); post('/collapse-all'); });
        document.getElementById('next-batch').addEventListener('click', () => post('/next-batch'));
        document.getElementById('show-all').addEventListener('click', () => post('/show-all'));

        document.addEventListener('keydown', e => {
            if (e.key === 'Escape' && sessionId) { showDetail(null); post('/collapse-all'); }
        });

        // Drag to pan, synced to the server on release
        let drag = null;
        svg.addEventListener('mousedown', e => { drag = { x: e.clientX, y: e.clientY, dx: 0, dy: 0 }; svg.classList.add('dragging'); });
        window.addEventListener('mousemove', e => {
            if (!drag) return;
            const dx = e.clientX - drag.x, dy = e.clientY - drag.y;
            view.panX += dx; view.panY += dy;
            drag.dx += dx; drag.dy += dy;
            drag.x = e.clientX; drag.y = e.clientY;
            applyTransform();
        });
        window.addEventListener('mouseup', async () => {
            if (!drag) return;
            const { dx, dy } = drag;
            drag = null;
            svg.classList.remove('dragging');
            if (dx || dy) view = await api('PUT', `/${sessionId}/viewport`, { dx, dy });
        });

        svg.addEventListener('wheel', async e => {
            e.preventDefault();
            view = await api('POST', `/${sessionId}/viewport/${e.deltaY < 0 ? 'zoom-in' : 'zoom-out'}`);
            applyTransform();
        }, { passive: false });

        window.addEventListener('resize', async () => {
            if (!sessionId) return;
            view = await api('PUT', `/${sessionId}/viewport`, { width: window.innerWidth, height: window.innerHeight });
            applyTransform();
        });

        // Zoom readout follows the live zoom level
        let lastZoom = null;
        function pollZoom() {
            if (view.zoom !== lastZoom) {
                lastZoom = view.zoom;
                document.getElementById('zoom-readout').textContent = `${Math.round(view.zoom * 100)}%`;
                document.getElementById('zoom-in').disabled = view.maxZoom !== undefined && view.zoom >= view.maxZoom;
                document.getElementById('zoom-out').disabled = view.minZoom !== undefined && view.zoom <= view.minZoom;
            }
            setTimeout(pollZoom, view.pollIntervalMs || 100);
        }

        async function init() {
            const data = await run(() => api('POST', '', { width: window.innerWidth, height: window.innerHeight }));
            if (!data) return;
            sessionId = data.id;
            applyState(data);
            pollZoom();
        }

        window.addEventListener('beforeunload', () => {
            if (sessionId) fetch(`/mindmap/sessions/${sessionId}`, { method: 'DELETE', keepalive: true });
        });

        init();
    </script>
</body>
</html>
"""
