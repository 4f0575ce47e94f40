from flask import jsonify, request


def success(status=200, **payload):
    return jsonify({'success': True, **payload}), status


def failure(error, status, message=None):
    data = {'success': False, 'error': error}
    if message:
        data['message'] = message
    return jsonify(data), status


def json_body():
    """The request's JSON object, or ``{}`` for a missing or non-object body."""
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}
