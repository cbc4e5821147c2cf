from flask import Blueprint, redirect, url_for, jsonify

main_bp = Blueprint('main', __name__)

@main_bp.route('/')
def index():
    return redirect(url_for('calculator.index'))

@main_bp.app_errorhandler(404)
def page_not_found(e):
    return jsonify({'error': 'Not found'}), 404
