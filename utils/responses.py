from flask import jsonify


def send_response(data, message=None, status=200, **extra):
    """Success envelope: {success: true, data, message, ...extra}"""
    body = {"success": True, "data": data}
    if message:
        body["message"] = message
    body.update(extra)
    return jsonify(body), status


def send_error(message, errors=None, status=404):
    """Failure envelope: {success: false, message, data?}"""
    body = {"success": False, "message": message}
    if errors:
        body["data"] = errors
    return jsonify(body), status


def send_api_error(error):
    """Render one of the utils.errors exceptions"""
    return send_error(error.message, getattr(error, "errors", None), error.status_code)
