from flask import Blueprint, jsonify
from flask_login import current_user, login_required, logout_user

from wordgroups.errors import Unauthenticated

main = Blueprint('main', __name__)

@main.route('/')
def index():
    return jsonify({'message': 'Welcome to the word groups puzzle server!'})

@main.route('/api/session', methods=['GET'])
def current_session():
    if not current_user.is_authenticated:
        raise Unauthenticated()
    return jsonify({'member': current_user.to_dict(), 'group': current_user.group.to_dict()})

@main.route('/api/logout', methods=['POST'])
@login_required
def logout():
    logout_user()
    return jsonify({'success': True})
