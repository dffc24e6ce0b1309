from flask import Blueprint, render_template, request, redirect, url_for, flash
from flask_login import current_user

from ..auth import AuthError, is_admin, sign_in, sign_in_rate_limited, sign_out, sign_up
from ..forms import AuthForm

auth_bp = Blueprint('auth', __name__)

AUTH_MODES = ('signin', 'signup')


def _landing_url(user):
    return url_for('admin.dashboard') if is_admin(user) else url_for('main.index')


@auth_bp.route('/auth', methods=['GET', 'POST'])
def auth():
    if current_user.is_authenticated:
        return redirect(_landing_url(current_user))

    mode = (request.values.get('mode') or 'signin').strip().lower()
    if mode not in AUTH_MODES:
        mode = 'signin'
    form = AuthForm()

    if request.method == 'POST':
        if mode == 'signin':
            limited, retry_after = sign_in_rate_limited()
            if limited:
                flash(f'Too many sign-in attempts. Try again in {retry_after} seconds.', 'danger')
                return render_template('auth.html', form=form, mode=mode), 429
        if not form.validate():
            flash(form.first_error() or 'Please check the form and try again.', 'danger')
            return render_template('auth.html', form=form, mode=mode), 400
        try:
            if mode == 'signup':
                user = sign_up(form.email.data, form.password.data, form.full_name.data)
                flash('Account created! Welcome to Beyond House.', 'success')
            else:
                user = sign_in(form.email.data, form.password.data)
                flash('Welcome back! You have successfully signed in.', 'success')
        except AuthError as exc:
            flash(str(exc), 'danger')
            return render_template('auth.html', form=form, mode=mode), 400
        return redirect(_landing_url(user))

    return render_template('auth.html', form=form, mode=mode)


@auth_bp.route('/auth/logout', methods=['POST'])
def logout():
    sign_out()
    flash('You have been signed out.', 'success')
    return redirect(url_for('main.index'))
