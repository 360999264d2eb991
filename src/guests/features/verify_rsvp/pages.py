import html

_PAGE = """<!DOCTYPE html>
<html>
<head>
    <meta charset="utf-8">
    <title>{title}</title>
    <style>
        body {{
            font-family: -apple-system, BlinkMacSystemFont, "Segoe UI", Roboto, sans-serif;
            display: flex;
            align-items: center;
            justify-content: center;
            min-height: 100vh;
            margin: 0;
            background: linear-gradient(135deg, #667eea 0%, #764ba2 100%);
        }}
        .container {{
            background: white;
            border-radius: 10px;
            padding: 40px;
            max-width: 500px;
            text-align: center;
            box-shadow: 0 10px 40px rgba(0,0,0,0.2);
        }}
        .icon {{ font-size: 64px; margin-bottom: 20px; color: {color}; }}
        h1 {{ color: #333; margin-bottom: 10px; }}
        p {{ color: #666; line-height: 1.6; }}
        .detail {{ background: #f8f9fa; padding: 10px; border-radius: 5px; margin: 20px 0; }}
    </style>
</head>
<body>
    <div class="container">
        <div class="icon">{icon}</div>
        <h1>{title}</h1>
        {body}
    </div>
</body>
</html>
"""


def success_page(email: str) -> str:
    body = (
        "<p>The RSVP has been verified and a confirmation email was sent to the guest.</p>\n"
        f'        <div class="detail"><strong>{html.escape(email)}</strong></div>'
    )
    return _PAGE.format(title="RSVP Verified", icon="&#10003;", color="#28a745", body=body)


def error_page(message: str) -> str:
    body = f'<div class="detail">{html.escape(message)}</div>'
    return _PAGE.format(title="Verification Failed", icon="&#10007;", color="#dc3545", body=body)
