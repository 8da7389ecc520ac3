from flask import Blueprint, jsonify, request
from flask_login import login_user

from wordgroups.auth import require_member
from wordgroups.schemas import GroupCreate, GroupJoin, parse_payload
from wordgroups.services.groups import create_group, join_group, leaderboard


groups = Blueprint('groups', __name__)


@groups.route('', methods=['POST'])
def create():
    data = parse_payload(GroupCreate, request.get_json(silent=True), 'Group name and member name are required')
    group, member = create_group(data.name, data.member_name)
    login_user(member, remember=True)
    return jsonify({'group': group.to_dict(), 'member': member.to_dict()}), 201


@groups.route('/join', methods=['POST'])
def join():
    data = parse_payload(GroupJoin, request.get_json(silent=True), 'Group code and member name are required')
    group, member, created = join_group(data.code, data.name)
    login_user(member, remember=True)
    return jsonify({'group': group.to_dict(), 'member': member.to_dict()}), 201 if created else 200


@groups.route('/<int:group_id>', methods=['GET'])
def get_group(group_id):
    member = require_member(group_id)
    return jsonify(member.group.to_dict())


@groups.route('/<int:group_id>/members', methods=['GET'])
def get_members(group_id):
    require_member(group_id)
    return jsonify([
        {'id': m.id, 'name': m.name, 'score': m.score}
        for m in leaderboard(group_id)
    ])
