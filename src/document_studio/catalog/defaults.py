"""
Built-in Catalog

The fixed set of layouts and themes used when no catalog configuration is
given or the configured one cannot be loaded. Kept as plain data so it goes
through the same normalization as any external catalog.
"""

from typing import Any, Dict

FALLBACK_THEME_ID = "clean-white"

DEFAULT_CATALOG: Dict[str, Any] = {
    "layouts": {
        "presentation": [
            {
                "id": "title-slide", "name": "Title Slide", "icon": "fa-heading",
                "style": {"textAlign": "center", "justify": "center"},
                "editableProperties": ["background", "textColor", "primaryColor", "secondaryColor"],
                "animations": ["fadeIn", "slideUp", "zoomIn"],
                "slots": [
                    {"id": "title", "type": "text", "placeholder": "Your Title", "maxChars": 60, "required": True},
                    {"id": "subtitle", "type": "text", "placeholder": "Subtitle", "maxChars": 100},
                ],
            },
            {
                "id": "content-slide", "name": "Content Slide", "icon": "fa-file-alt",
                "editableProperties": ["background", "textColor", "primaryColor"],
                "animations": ["fadeIn", "slideLeft"],
                "slots": [
                    {"id": "heading", "type": "text", "placeholder": "Heading", "maxChars": 50, "required": True},
                    {"id": "body", "type": "textarea", "placeholder": "Body text...", "maxChars": 400},
                ],
            },
            {
                "id": "two-column", "name": "Two Columns", "icon": "fa-columns",
                "slots": [
                    {"id": "heading", "type": "text", "placeholder": "Section heading", "maxChars": 50},
                    {"id": "left-title", "type": "text", "placeholder": "Left title", "maxChars": 40},
                    {"id": "left-body", "type": "textarea", "placeholder": "Left content", "maxChars": 200},
                    {"id": "right-title", "type": "text", "placeholder": "Right title", "maxChars": 40},
                    {"id": "right-body", "type": "textarea", "placeholder": "Right content", "maxChars": 200},
                ],
            },
            {
                "id": "quote-slide", "name": "Quote Slide", "icon": "fa-quote-left",
                "style": {"textAlign": "center", "justify": "center"},
                "slots": [
                    {"id": "quote", "type": "textarea", "placeholder": "Quote text", "maxChars": 250, "role": "body"},
                    {"id": "author", "type": "text", "placeholder": "Author name", "maxChars": 50},
                ],
            },
            {
                "id": "stat-slide", "name": "Statistics", "icon": "fa-chart-bar",
                "style": {"textAlign": "center"},
                "slots": [
                    {"id": "heading", "type": "text", "placeholder": "Our Stats", "maxChars": 50},
                    {"id": "stat1", "type": "stat", "placeholder": {"value": "0", "label": "Label"}},
                    {"id": "stat2", "type": "stat", "placeholder": {"value": "0", "label": "Label"}},
                    {"id": "stat3", "type": "stat", "placeholder": {"value": "0", "label": "Label"}},
                ],
            },
            {
                "id": "layout-flowchart", "name": "Flowchart", "icon": "fa-project-diagram",
                "slots": [
                    {"id": "heading", "type": "text", "placeholder": "Flowchart Title", "maxChars": 50},
                    {"id": "visual", "type": "mermaid", "placeholder": "graph LR\n  A[Start] --> B[Finish]"},
                ],
            },
            {
                "id": "cta-slide", "name": "Call to Action", "icon": "fa-bullhorn",
                "style": {"textAlign": "center", "justify": "center"},
                "slots": [
                    {"id": "heading", "type": "text", "placeholder": "Ready to start?", "maxChars": 60},
                    {"id": "body", "type": "textarea", "placeholder": "Join us today", "maxChars": 200},
                    {"id": "cta-text", "type": "text", "placeholder": "Get Started", "maxChars": 30},
                ],
            },
            {
                "id": "layout-thankyou", "name": "Thank You", "icon": "fa-check-circle",
                "style": {"textAlign": "center", "justify": "center"},
                "slots": [
                    {"id": "main-text", "type": "text", "placeholder": "Thank You!", "maxChars": 60, "role": "heading"},
                    {"id": "contact", "type": "text", "placeholder": "email@example.com", "maxChars": 80},
                ],
            },
        ],
        "social": [
            {
                "id": "instagram-square", "name": "Instagram Square", "icon": "fa-instagram",
                "style": {"textAlign": "center", "justify": "center"},
                "slots": [
                    {"id": "background", "type": "background", "placeholder": ""},
                    {"id": "headline", "type": "text", "placeholder": "Headline", "maxChars": 80},
                    {"id": "body", "type": "textarea", "placeholder": "Post content", "maxChars": 250},
                    {"id": "cta", "type": "text", "placeholder": "Link", "maxChars": 30},
                ],
            },
            {
                "id": "linkedin-post", "name": "LinkedIn Post", "icon": "fa-linkedin",
                "slots": [
                    {"id": "hook", "type": "text", "placeholder": "Hook", "maxChars": 100, "role": "heading"},
                    {"id": "body", "type": "textarea", "placeholder": "Post content", "maxChars": 300},
                    {"id": "hashtags", "type": "text", "placeholder": "#hashtags", "maxChars": 100},
                ],
            },
            {
                "id": "twitter-post", "name": "Twitter/X Post", "icon": "fa-twitter",
                "style": {"justify": "center"},
                "slots": [
                    {"id": "content", "type": "textarea", "placeholder": "Your tweet...", "maxChars": 280,
                     "required": True, "role": "body"},
                ],
            },
        ],
        "resume": [
            {
                "id": "resume-header", "name": "Resume Header", "icon": "fa-user",
                "slots": [
                    {"id": "name", "type": "text", "placeholder": "Your Name", "maxChars": 40,
                     "required": True, "role": "heading"},
                    {"id": "title", "type": "text", "placeholder": "Job Title", "maxChars": 50, "role": "body"},
                    {"id": "email", "type": "text", "placeholder": "email@example.com", "maxChars": 60},
                    {"id": "phone", "type": "text", "placeholder": "+1 234 567 890", "maxChars": 30},
                ],
            },
            {
                "id": "resume-section", "name": "Resume Section", "icon": "fa-list",
                "slots": [
                    {"id": "section-title", "type": "text", "placeholder": "Section Title", "maxChars": 50},
                    {"id": "item1-title", "type": "text", "placeholder": "Item 1", "maxChars": 60},
                    {"id": "item1-date", "type": "text", "placeholder": "Date", "maxChars": 30},
                    {"id": "item1-desc", "type": "textarea", "placeholder": "Description", "maxChars": 300,
                     "role": "body"},
                ],
            },
            {
                "id": "resume-skills", "name": "Skills Section", "icon": "fa-cogs",
                "slots": [
                    {"id": "title", "type": "text", "placeholder": "Skills", "maxChars": 50},
                    {"id": "skills", "type": "textarea", "placeholder": "Python, SQL, Leadership",
                     "maxChars": 300, "role": "body"},
                    {"id": "accent", "type": "color", "placeholder": "#3b82f6"},
                ],
            },
        ],
        "website": [
            {
                "id": "hero-section", "name": "Hero Section", "icon": "fa-desktop",
                "style": {"textAlign": "center", "justify": "center", "padding": "60px"},
                "slots": [
                    {"id": "background", "type": "background", "placeholder": ""},
                    {"id": "headline", "type": "text", "placeholder": "Hero headline", "maxChars": 60},
                    {"id": "subheadline", "type": "textarea", "placeholder": "Subheadline", "maxChars": 150},
                    {"id": "ctaPrimary", "type": "text", "placeholder": "Get Started", "maxChars": 30},
                ],
            },
            {
                "id": "features-section", "name": "Features Section", "icon": "fa-th-large",
                "style": {"padding": "48px"},
                "slots": [
                    {"id": "heading", "type": "text", "placeholder": "Features Title", "maxChars": 50},
                    {"id": "description", "type": "textarea", "placeholder": "What makes us different",
                     "maxChars": 300},
                ],
            },
            {
                "id": "cta-section", "name": "CTA Section", "icon": "fa-bullhorn",
                "style": {"textAlign": "center", "padding": "48px"},
                "slots": [
                    {"id": "heading", "type": "text", "placeholder": "CTA Title", "maxChars": 60},
                    {"id": "body", "type": "textarea", "placeholder": "CTA description", "maxChars": 200},
                    {"id": "cta", "type": "text", "placeholder": "Sign Up", "maxChars": 30},
                ],
            },
            {
                "id": "footer-section", "name": "Footer Section", "icon": "fa-sitemap",
                "style": {"padding": "24px"},
                "slots": [
                    {"id": "brand", "type": "text", "placeholder": "Brand Name", "maxChars": 30},
                    {"id": "footer", "type": "text", "placeholder": "Footer content", "maxChars": 100},
                ],
            },
        ],
    },
    "themes": [
        {
            "id": "clean-white", "name": "Clean White",
            "colors": {"bg": "#ffffff", "text": "#333333", "primary": "#3b82f6",
                       "secondary": "#64748b", "accent": "#8b5cf6"},
            "fonts": {"heading": "Poppins, sans-serif", "body": "Inter, sans-serif"},
        },
        {
            "id": "dark-mode", "name": "Dark Mode",
            "colors": {"bg": "#1a1a2e", "text": "#ffffff", "primary": "#6366f1",
                       "secondary": "#94a3b8", "accent": "#a855f7"},
            "fonts": {"heading": "Poppins, sans-serif", "body": "Inter, sans-serif"},
        },
        {
            "id": "warm-sand", "name": "Warm Sand",
            "colors": {"bg": "#fffbeb", "text": "#78350f", "primary": "#f59e0b",
                       "secondary": "#d97706", "accent": "#ea580c"},
        },
    ],
}
