"""
Live page glue - snapshot capture, highlighting, notifications

Runs small JavaScript snippets through Playwright's page.evaluate. The
detector itself never touches the page: it works on the snapshot, and
highlight requests are routed back to live elements through the element
references kept on window at capture time, so nodes added or removed by page
scripts between capture and highlighting do not shift the targets.
"""

from typing import Any, Dict, List, Optional

from ..diagnostics import get_logger

logger = get_logger(__name__)

IMAGE_HIGHLIGHT_CLASS = "pricelens-image"
TITLE_HIGHLIGHT_CLASS = "pricelens-title"
PRICE_HIGHLIGHT_CLASS = "pricelens-price"
CONTAINER_MARKER_CLASS = "pricelens-container"

STYLE_ELEMENT_ID = "pricelens-styles"
NOTIFICATION_ELEMENT_ID = "pricelens-notification"
# window property holding the captured elements, indexed like the snapshot
ELEMENT_REGISTRY_KEY = "__pricelensElements"

HIGHLIGHT_CSS = f"""
.{IMAGE_HIGHLIGHT_CLASS} {{
    border: 4px solid blueviolet !important;
    box-sizing: border-box !important;
    filter: brightness(90%) !important;
}}
.{TITLE_HIGHLIGHT_CLASS} {{
    background-color: rgba(173, 216, 230, 0.7) !important;
    padding: 2px 4px !important;
    border-radius: 3px !important;
}}
.{PRICE_HIGHLIGHT_CLASS} {{
    background-color: rgba(255, 255, 0, 0.7) !important;
    padding: 2px 4px !important;
    border-radius: 3px !important;
}}
"""


SNAPSHOT_JS = """
(registryKey) => {
    const all = Array.from(document.querySelectorAll('*'));
    window[registryKey] = all;
    const indexOf = new Map();
    all.forEach((el, i) => indexOf.set(el, i));

    const snap = (el) => {
        const attrs = {};
        for (const a of Array.from(el.attributes || [])) {
            attrs[a.name] = a.value;
        }
        const tag = el.tagName.toLowerCase();
        if (tag === 'img' && el.hasAttribute('src')) {
            attrs.src = el.src;  // resolved absolute URL
        }
        const isHtml = el instanceof HTMLElement;
        return {
            tag: tag,
            text: isHtml ? (el.innerText || '') : (el.textContent || ''),
            attrs: attrs,
            width: isHtml ? el.offsetWidth : 0,
            height: isHtml ? el.offsetHeight : 0,
            visible: el === document.body || (isHtml && el.offsetParent !== null),
            natural_width: tag === 'img' ? el.naturalWidth : 0,
            natural_height: tag === 'img' ? el.naturalHeight : 0,
            index: indexOf.get(el),
            children: Array.from(el.children).map(snap)
        };
    };

    return {
        url: window.location.href,
        title: document.title,
        root: snap(document.body)
    };
}
"""


HIGHLIGHT_JS = """
([groups, css, styleId, registryKey]) => {
    const registry = window[registryKey] || [];
    const targets = groups.map(([cls, indices]) =>
        [cls, indices.map(i => registry[i]).filter(el => el && el.isConnected)]);

    if (!document.getElementById(styleId)) {
        const style = document.createElement('style');
        style.id = styleId;
        style.textContent = css;
        (document.head || document.documentElement).appendChild(style);
    }

    let applied = 0;
    for (const [cls, elements] of targets) {
        for (const el of elements) {
            el.classList.add(cls);
            applied++;
        }
    }
    return applied;
}
"""


NOTIFICATION_JS = """
([message, type, durationMs, elementId]) => {
    let notification = document.getElementById(elementId);
    if (!notification) {
        notification = document.createElement('div');
        notification.id = elementId;
        Object.assign(notification.style, {
            position: 'fixed',
            top: '10px',
            right: '10px',
            backgroundColor: 'rgba(0, 0, 0, 0.7)',
            color: 'white',
            padding: '10px 15px',
            borderRadius: '5px',
            zIndex: '10000',
            fontSize: '14px',
            fontFamily: 'sans-serif',
            opacity: '0',
            transition: 'opacity 0.5s ease-in-out'
        });
        document.body.appendChild(notification);
    }

    notification.innerText = message;
    notification.style.display = 'block';
    notification.style.backgroundColor = type === 'error' ? 'rgba(200, 0, 0, 0.7)' : 'rgba(0, 0, 0, 0.7)';
    notification.style.opacity = '1';

    setTimeout(() => {
        notification.style.opacity = '0';
        setTimeout(() => { notification.style.display = 'none'; }, 500);
    }, durationMs);
    return true;
}
"""


async def capture_snapshot(page) -> Dict[str, Any]:
    """
    Capture the rendered DOM of the page's main frame.

    Returns {"url", "title", "root"} where root is the nested body snapshot
    accepted by build_tree().
    """
    snapshot = await page.evaluate(SNAPSHOT_JS, ELEMENT_REGISTRY_KEY)
    if not snapshot or not isinstance(snapshot, dict) or not snapshot.get("root"):
        raise ValueError("Page returned an empty DOM snapshot")
    return snapshot


async def show_notification(page, message: str, kind: str = "info", duration_ms: int = 3000) -> None:
    """Show a transient status box in the top-right corner of the page."""
    await page.evaluate(NOTIFICATION_JS, [message, kind, duration_ms, NOTIFICATION_ELEMENT_ID])


class PageHighlighter:
    """
    Collect highlight requests during a pass and apply them in one round trip.

    Usage:
        highlighter = PageHighlighter(page)
        result = detector.detect(root, highlighter=highlighter)
        await highlighter.apply()
    """

    def __init__(self, page, mark_containers: bool = True):
        self.page = page
        self.mark_containers = mark_containers
        self._groups: Dict[str, List[int]] = {
            IMAGE_HIGHLIGHT_CLASS: [],
            TITLE_HIGHLIGHT_CLASS: [],
            PRICE_HIGHLIGHT_CLASS: [],
            CONTAINER_MARKER_CLASS: [],
        }

    def __call__(self, match) -> None:
        self._add(IMAGE_HIGHLIGHT_CLASS, match.image)
        self._add(TITLE_HIGHLIGHT_CLASS, match.title)
        self._add(PRICE_HIGHLIGHT_CLASS, match.price)
        if self.mark_containers:
            self._add(CONTAINER_MARKER_CLASS, match.container)

    def _add(self, cls: str, node) -> None:
        index: Optional[int] = getattr(node, "index", None)
        if index is not None:
            self._groups[cls].append(index)

    @property
    def pending(self) -> int:
        return sum(len(v) for v in self._groups.values())

    async def apply(self) -> int:
        if not self.pending:
            return 0
        groups = [[cls, indices] for cls, indices in self._groups.items() if indices]
        applied = await self.page.evaluate(
            HIGHLIGHT_JS, [groups, HIGHLIGHT_CSS, STYLE_ELEMENT_ID, ELEMENT_REGISTRY_KEY]
        )
        logger.debug(f"Applied {applied} highlight class(es)")
        for indices in self._groups.values():
            indices.clear()
        return int(applied or 0)
