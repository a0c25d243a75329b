from flask import Flask

from kennel.routes.common import register_error_handlers


def create_app() -> Flask:
    """Application factory."""
    app = Flask(__name__)

    register_error_handlers(app)

    # Register blueprints
    from kennel.routes.breeds import bp as breeds_bp
    from kennel.routes.dogs import bp as dogs_bp

    app.register_blueprint(breeds_bp, url_prefix="/api/breeds")
    app.register_blueprint(dogs_bp, url_prefix="/api/dogs")

    @app.route("/api/health")
    def health():
        return {"status": "ok"}

    return app


# For flask run command
app = create_app()
