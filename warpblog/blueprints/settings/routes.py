from flask import jsonify
from warpblog.blueprints.settings import settings_bp
from warpblog.blueprints.settings.forms import WebsiteSettingsForm
from warpblog.models.auth import Role
from warpblog.services.setting_service import SettingService
from warpblog.utils.permissions import role_required
from warpblog.utils.validators import validate_form, provided_data


@settings_bp.route('/website', methods=['GET'])
def get_website_settings():
    return jsonify(SettingService.get_website_settings())


@settings_bp.route('/website', methods=['POST'])
@role_required(Role.ADMIN)
def set_website_settings():
    form = validate_form(WebsiteSettingsForm())
    return jsonify(SettingService.set_website_settings(provided_data(form)))
