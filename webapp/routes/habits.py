"""
Habit Routes

CRUD endpoints for the logged-in user's habits. Habits owned by other
users answer 404, same as habits that do not exist.
"""

from flask import Blueprint, current_app, g, jsonify

from webapp.routes.auth import get_json_body
from webapp.services import habit_service
from webapp.services.auth_service import login_required

habits_bp = Blueprint('habits', __name__, url_prefix='/habits')


def _timezone():
    return current_app.config['HABIT_TIMEZONE']


@habits_bp.route('', methods=['GET'])
@login_required
def list_habits():
    return jsonify(habit_service.list_habits(g.user_id, _timezone()))


@habits_bp.route('', methods=['POST'])
@login_required
def create_habit():
    data = get_json_body()
    habit = habit_service.create_habit(g.user_id, data.get('name'), _timezone())
    return jsonify(habit), 201


@habits_bp.route('/<int:habit_id>', methods=['PUT'])
@login_required
def toggle_habit(habit_id):
    """Mark as done for today, or undo if already done today."""
    return jsonify(habit_service.toggle_habit(g.user_id, habit_id, _timezone()))


@habits_bp.route('/<int:habit_id>', methods=['DELETE'])
@login_required
def delete_habit(habit_id):
    habit_service.delete_habit(g.user_id, habit_id)
    return jsonify({'message': 'Habit deleted successfully'})
