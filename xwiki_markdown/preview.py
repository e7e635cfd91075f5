"""Standalone preview page around a rendered HTML fragment."""

from __future__ import annotations

import html

PREVIEW_STYLESHEET = """
body {
    font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif;
    padding: 20px;
    line-height: 1.4;
    background: #ffffff;
    color: #333333;
    max-width: 900px;
    margin: 0 auto;
}
h1, h2, h3, h4, h5, h6 { color: #2c3e50; margin-top: 24px; margin-bottom: 12px; font-weight: 600; }
h1 { font-size: 2em; border-bottom: 2px solid #e1e4e8; padding-bottom: 8px; }
h2 { font-size: 1.5em; border-bottom: 1px solid #e1e4e8; padding-bottom: 6px; }
h3 { font-size: 1.25em; }
code {
    background: #f6f8fa;
    padding: 2px 6px;
    border-radius: 4px;
    font-family: 'SF Mono', Monaco, 'Cascadia Code', monospace;
    font-size: 0.9em;
    color: #d73a49;
}
pre { background: #f6f8fa; padding: 16px; border-radius: 6px; overflow-x: auto; border: 1px solid #e1e4e8; }
pre code { background: none; padding: 0; color: #24292e; }
.language-javascript .token.keyword { color: #d73a49; }
.language-javascript .token.function { color: #6f42c1; }
.language-javascript .token.string { color: #032f62; }
.language-javascript .token.comment { color: #6a737d; font-style: italic; }
.language-javascript .token.number { color: #005cc5; }
table { border-collapse: collapse; width: 100%; margin: 16px 0; border: 1px solid #e1e4e8; }
td, th { border: 1px solid #e1e4e8; padding: 12px; text-align: left; }
th { background: #f6f8fa; font-weight: 600; }
a { color: #0366d6; text-decoration: none; }
a:hover { text-decoration: underline; }
.toc {
    background: #f8f9fa;
    padding: 16px;
    border-radius: 6px;
    border: 1px solid #e1e4e8;
    margin: 16px 0;
    white-space: pre-line;
    font-family: monospace;
    font-size: 0.9em;
}
blockquote {
    margin: 16px 0;
    padding: 12px 16px;
    border-left: 4px solid #dfe2e5;
    background: #f8f9fa;
    color: #586069;
    font-style: italic;
}
ul, ol { margin: 8px 0; padding-left: 24px; }
ul ul, ol ol, ul ol, ol ul { margin: 4px 0; }
li { margin: 2px 0; }
img { max-width: 100%; height: auto; border-radius: 4px; }
.info-box, .warning-box, .error-box { padding: 12px 16px; margin: 16px 0; border-radius: 6px; border-left: 4px solid; }
.info-box { background: #e3f2fd; border-left-color: #2196f3; color: #0d47a1; }
.warning-box { background: #fff3e0; border-left-color: #ff9800; color: #e65100; }
.error-box { background: #ffebee; border-left-color: #f44336; color: #c62828; }
.monospace { font-family: 'SF Mono', Monaco, 'Cascadia Code', monospace; }
del { color: #6a737d; }
sup, sub { font-size: 0.8em; }
dl { margin: 16px 0; }
dt { font-weight: 600; margin-top: 8px; }
dd { margin-left: 20px; margin-bottom: 8px; }
hr { border: none; border-top: 2px solid #e1e4e8; margin: 24px 0; }
p { margin: 8px 0; }
p:first-child { margin-top: 0; }
p:last-child { margin-bottom: 0; }
"""

# Hosts post {command: "scroll", percentage} to keep the preview aligned with the editor
SCROLL_SYNC_SCRIPT = """
window.addEventListener('message', event => {
    const message = event.data;
    if (message.command === 'scroll') {
        const scrollHeight = document.body.scrollHeight - window.innerHeight;
        window.scrollTo(0, scrollHeight * message.percentage);
    }
});
"""


def content_security_policy(csp_source: str = "'self'") -> str:
    """Build the preview's Content-Security-Policy.

    Images may come from `csp_source`, any HTTPS origin or data URIs; scripts
    and styles only from `csp_source` and the page itself.

    Examples:
        content_security_policy("https://file+.vscode-resource.vscode-cdn.net")
    """
    return (
        f"default-src 'none'; img-src {csp_source} https: data:; "
        f"script-src {csp_source} 'unsafe-inline'; style-src {csp_source} 'unsafe-inline';"
    )


def build_preview_page(
    fragment: str, title: str = "XWiki Preview", csp_source: str = "'self'"
) -> str:
    """Embed a rendered fragment in a complete HTML document.

    Args:
        fragment: Output of `render_xwiki_html`.
        title: Page title.
        csp_source: Origin allowed to serve images, scripts and styles.

    Returns:
        str: HTML document.

    Examples:
        build_preview_page(render_xwiki_html("= Title ="))
    """
    policy = html.escape(content_security_policy(csp_source))
    return (
        "<!DOCTYPE html>\n"
        "<html>\n"
        "<head>\n"
        '    <meta charset="UTF-8">\n'
        '    <meta name="viewport" content="width=device-width, initial-scale=1.0">\n'
        f'    <meta http-equiv="Content-Security-Policy" content="{policy}">\n'
        f"    <title>{html.escape(title)}</title>\n"
        f"    <style>{PREVIEW_STYLESHEET}</style>\n"
        f"    <script>{SCROLL_SYNC_SCRIPT}</script>\n"
        "</head>\n"
        "<body>\n"
        f"{fragment}\n"
        "</body>\n"
        "</html>\n"
    )
