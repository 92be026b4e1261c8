"""
Academic Metrics Engine
Main Flask application entry point
"""

import logging

from flask import Flask, jsonify
from flask_wtf.csrf import CSRFProtect
from config import Config
from database import db, init_db, DatabaseError
from utils.exceptions import MetricsError
from utils.locks import KeyedLock

def create_app(config_class=Config):
    """Application factory pattern"""
    app = Flask(__name__)
    app.config.from_object(config_class)

    logging.basicConfig(format='%(asctime)s %(levelname)s %(name)s: %(message)s')
    logging.getLogger().setLevel(app.config['LOG_LEVEL'])

    # Initialize extensions with app
    db.init_app(app)
    csrf = CSRFProtect(app)

    # Process-wide locks serializing recomputes per aggregate key
    app.extensions['metrics_locks'] = KeyedLock()

    # Register blueprints
    from routes.attendance import attendance_bp
    from routes.grades import grades_bp
    from routes.eligibility import eligibility_bp
    from routes.reports import reports_bp

    # JSON API callers authenticate at the gateway, not with form tokens
    for blueprint in (attendance_bp, grades_bp, eligibility_bp, reports_bp):
        csrf.exempt(blueprint)

    app.register_blueprint(attendance_bp, url_prefix='/api/attendance')
    app.register_blueprint(grades_bp, url_prefix='/api/grades')
    app.register_blueprint(eligibility_bp, url_prefix='/api/eligibility')
    app.register_blueprint(reports_bp, url_prefix='/api/reports')

    @app.errorhandler(MetricsError)
    def handle_metrics_error(error):
        if error.status_code >= 500:
            app.logger.error("Request failed: %s", error.message)
        return jsonify(error.to_dict()), error.status_code

    @app.errorhandler(DatabaseError)
    def handle_database_error(error):
        app.logger.error("Database error: %s", error.message)
        return jsonify({'success': False, 'message': 'Database operation failed'}), error.status_code

    # Initialize database
    init_db(app)

    return app

if __name__ == '__main__':
    app = create_app()
    app.run(host='0.0.0.0', port=8000, debug=True, use_reloader=False, threaded=True)
