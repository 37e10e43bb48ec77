"""Entry point for the Flask application."""
import os

from merit_fund.web import create_app

app = create_app(os.environ.get('MERIT_FUND_ENV', 'development'))


def main():
    app.run(host=os.environ.get('MERIT_FUND_HOST', '127.0.0.1'),
            port=int(os.environ.get('MERIT_FUND_PORT', '8000')),
            debug=app.config.get('DEBUG', False))


if __name__ == '__main__':
    main()
