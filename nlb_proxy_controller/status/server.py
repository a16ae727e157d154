import logging
from flask import Flask, current_app, jsonify

logger = logging.getLogger(__name__)

# Initialize Flask app
app = Flask(__name__)
app.config['RECONCILER'] = None

def start_status_server(reconciler, port: int = 8080):
    """Serve health and last-pass status for the given reconciler."""
    try:
        app.config['RECONCILER'] = reconciler
        logger.info(f"Starting status server on port {port}")
        app.run(
            host='0.0.0.0',
            port=port,
            threaded=True,
            use_reloader=False
        )
    except Exception as e:
        logger.error(f"Failed to start status server: {str(e)}")
        raise

@app.route('/health', methods=['GET'])
def health_check():
    """Health check endpoint for liveness probes."""
    return jsonify({"status": "healthy"}), 200

@app.route('/status', methods=['GET'])
def status():
    """Report the outcome of the last reconciliation pass."""
    reconciler = current_app.config.get('RECONCILER')
    report = reconciler.last_report if reconciler is not None else None
    if report is None:
        return jsonify({"status": "pending", "message": "No reconciliation pass has run yet"}), 503
    return jsonify({"status": "ok", "lastPass": report.to_dict()}), 200
