def register_blueprints(app):
    from newsapp.api.auth import bp as auth_bp
    from newsapp.api.news import bp as news_bp
    from newsapp.api.user import bp as user_bp

    app.register_blueprint(auth_bp)
    app.register_blueprint(news_bp)
    app.register_blueprint(user_bp)
