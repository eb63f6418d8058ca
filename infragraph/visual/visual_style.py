# Presentation tokens per resource kind. The graph model never carries
# these; serializers look them up so a renderer can swap in its own map.

NODE_STYLE = {
    "api": {
        "icon": "globe-alt",
        "color": "#2563EB",
    },
    "websocket": {
        "icon": "chat-bubble-left-right",
        "color": "#7C3AED",
    },
    "schedule": {
        "icon": "clock",
        "color": "#0891B2",
    },
    "keyvaluestore": {
        "icon": "circle-stack",
        "color": "#DB2777",
    },
    "bucket": {
        "icon": "archive-box",
        "color": "#EA580C",
    },
    "topic": {
        "icon": "megaphone",
        "color": "#16A34A",
    },
    "service": {
        "icon": "cpu-chip",
        "color": "#475569",
    },
}

DEFAULT_STYLE = {
    "icon": "cube",
    "color": "#9E9E9E",
}


def style_for(kind: str, styles=None) -> dict:
    styles = NODE_STYLE if styles is None else styles
    return styles.get(kind, DEFAULT_STYLE)
