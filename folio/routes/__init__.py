"""Routes package for the folio application."""


def register_routes(app):
    """Register all route blueprints with the application."""
    from .projects import projects_bp
    from .pages import pages_bp
    from .page_groups import page_groups_bp
    from .ocr import ocr_bp
    from .translate import translate_bp
    from .admin import admin_bp

    app.register_blueprint(projects_bp, url_prefix='/api/projects')
    app.register_blueprint(pages_bp, url_prefix='/api/pages')
    app.register_blueprint(page_groups_bp, url_prefix='/api/page-groups')
    app.register_blueprint(ocr_bp, url_prefix='/api/ocr')
    app.register_blueprint(translate_bp, url_prefix='/api/translate')
    app.register_blueprint(admin_bp, url_prefix='/api/admin')
