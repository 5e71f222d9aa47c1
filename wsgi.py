# WSGI para gunicorn: `gunicorn wsgi:app`
from dakarmarket.main import create_app

app = create_app()
