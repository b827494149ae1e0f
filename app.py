from flask import Flask, request, jsonify
from flask_login import LoginManager, login_user, logout_user, login_required, current_user
from flask_migrate import Migrate
from models import db, User, Workout
from errors import ApiError, UserNotFound, IncorrectPassword, EmailInUse
from utils import parse_workout_string, workout_fields_from_request, parse_date_param, start_of_day, day_bounds
from dashboard import daily_summary, weekly_calories_burned, total_calories, TRAILING_DAYS
from fitness_models.calorie_estimator import CalorieEstimator, DEFAULT_BODY_WEIGHT_KG
from fitness_models.daily_needs import calculate_daily_calories
from datetime import datetime, timedelta
import os
import re
from dotenv import load_dotenv

load_dotenv()

# App version
VERSION = "1.0.0"

EMAIL_PATTERN = re.compile(r'^[^\s@]+@[^\s@]+\.[^\s@]+$')

app = Flask(__name__)

# Database configuration - use PostgreSQL in production, SQLite in development
database_url = os.getenv('DATABASE_URL', 'sqlite:///fittrack.db')

# Render uses 'postgres://' but SQLAlchemy needs 'postgresql://'
if database_url.startswith('postgres://'):
    database_url = database_url.replace('postgres://', 'postgresql://', 1)

app.config['SQLALCHEMY_DATABASE_URI'] = database_url
app.config['SQLALCHEMY_TRACK_MODIFICATIONS'] = False
app.config['SECRET_KEY'] = os.getenv('SECRET_KEY', 'dev-secret-key-change-in-production')

# Calorie estimation - assumed body weight of the person working out (kg)
app.config['ASSUMED_BODY_WEIGHT_KG'] = float(os.getenv('ASSUMED_BODY_WEIGHT_KG', DEFAULT_BODY_WEIGHT_KG))
# Use the body weight from the user's profile instead, when they have one
app.config['USE_PROFILE_WEIGHT'] = os.getenv('USE_PROFILE_WEIGHT', 'false').lower() in ('1', 'true', 'yes')

# Session configuration for persistent login
app.config['REMEMBER_COOKIE_DURATION'] = timedelta(days=30)
app.config['PERMANENT_SESSION_LIFETIME'] = timedelta(days=30)
app.config['SESSION_COOKIE_SECURE'] = os.getenv('SESSION_COOKIE_SECURE', 'false').lower() == 'true'
app.config['SESSION_COOKIE_HTTPONLY'] = True  # Prevent JavaScript access to session cookie
app.config['SESSION_COOKIE_SAMESITE'] = 'Lax'  # CSRF protection

db.init_app(app)
migrate = Migrate(app, db)

# Initialize Flask-Login
login_manager = LoginManager()
login_manager.init_app(app)

@login_manager.user_loader
def load_user(user_id):
    return db.session.get(User, int(user_id))

@login_manager.unauthorized_handler
def unauthorized():
    return jsonify({'success': False, 'status': 401, 'message': 'You are not authenticated'}), 401

def initialize_app():
    """Create any missing tables"""
    db.create_all()
    print(f"[INFO] FitTrack {VERSION} database ready ({app.config['SQLALCHEMY_DATABASE_URI'].split(':', 1)[0]})")

with app.app_context():
    initialize_app()

@app.errorhandler(ApiError)
def handle_api_error(error):
    app.logger.warning('%s %s failed (%s): %s', request.method, request.path, error.status_code, error.message)
    return jsonify(error.to_dict()), error.status_code

def get_estimator():
    """Calorie estimator for the signed-in user"""
    body_weight = app.config['ASSUMED_BODY_WEIGHT_KG']
    if app.config['USE_PROFILE_WEIGHT'] and current_user.weight:
        body_weight = current_user.weight
    return CalorieEstimator(body_weight)

def _optional_body_weight(value):
    if value is None or value == '':
        return None
    if isinstance(value, bool):
        raise ApiError('Body weight must be a number')
    try:
        weight = float(value)
    except (TypeError, ValueError, OverflowError):
        raise ApiError('Body weight must be a number')
    if not 0 < weight < float('inf'):
        raise ApiError('Body weight must be positive')
    return weight

def _json_body():
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}

def _text_field(data, key):
    """A string field from a JSON body; anything that isn't a string counts as missing"""
    value = data.get(key)
    return value if isinstance(value, str) else ''

# ===== AUTHENTICATION ROUTES =====

@app.route('/api/user/signup', methods=['POST'])
def signup():
    data = _json_body()
    email = _text_field(data, 'email').strip()
    password = _text_field(data, 'password')
    name = _text_field(data, 'name')

    # Validation
    if not email or not password or not name:
        raise ApiError('Name, email, and password are required')

    if not EMAIL_PATTERN.match(email):
        raise ApiError('Please provide a valid email address')

    if len(password) < 6:
        raise ApiError('Password must be at least 6 characters long')

    if len(name.strip()) < 2:
        raise ApiError('Name must be at least 2 characters long')

    if User.query.filter_by(email=email).first():
        raise EmailInUse('Email is already in use.')

    # Create user
    user = User(name=name.strip(), email=email, img=_text_field(data, 'img') or None,
                weight=_optional_body_weight(data.get('weight')))
    user.set_password(password)
    db.session.add(user)
    db.session.commit()

    login_user(user, remember=True)
    return jsonify({'success': True, 'user': user.to_dict()})

@app.route('/api/user/signin', methods=['POST'])
def signin():
    data = _json_body()
    email = _text_field(data, 'email').strip()
    password = _text_field(data, 'password')

    if not email or not password:
        raise ApiError('Email and password are required')

    if not EMAIL_PATTERN.match(email):
        raise ApiError('Please provide a valid email address')

    user = User.query.filter_by(email=email).first()
    if not user:
        raise UserNotFound('User not found')

    if not user.check_password(password):
        raise IncorrectPassword('Incorrect password')

    login_user(user, remember=data.get('remember_me') is not False)
    return jsonify({'success': True, 'user': user.to_dict()})

@app.route('/api/user/logout', methods=['POST'])
@login_required
def logout():
    logout_user()
    return jsonify({'success': True})

# ===== DASHBOARD =====

@app.route('/api/user/dashboard')
@login_required
def get_user_dashboard():
    now = datetime.now()
    window_start = start_of_day(now - timedelta(days=TRAILING_DAYS - 1))
    _, window_end = day_bounds(now)

    workouts = Workout.query.filter(
        Workout.user_id == current_user.id,
        Workout.date >= window_start,
        Workout.date < window_end
    ).all()

    summary = daily_summary(workouts, now)
    summary['totalWeeksCaloriesBurnt'] = weekly_calories_burned(workouts, now)
    return jsonify(summary)

# ===== WORKOUTS =====

@app.route('/api/user/workout')
@login_required
def get_workouts_by_date():
    date_param = request.args.get('date')
    day = parse_date_param(date_param) if date_param else datetime.now()
    start, end = day_bounds(day)

    workouts = Workout.query.filter(
        Workout.user_id == current_user.id,
        Workout.date >= start,
        Workout.date < end
    ).order_by(Workout.date.asc()).all()

    return jsonify({
        'todaysWorkouts': [w.to_dict() for w in workouts],
        'totalCaloriesBurnt': total_calories(workouts)
    })

@app.route('/api/user/workout', methods=['POST'])
@login_required
def add_workout():
    data = request.get_json(silent=True)
    from_text = isinstance(data, dict) and 'workoutString' in data

    # Parse everything first so a bad entry saves nothing
    if from_text:
        parsed = parse_workout_string(data['workoutString'])
    else:
        parsed = [workout_fields_from_request(data)]

    estimator = get_estimator()
    workouts = []
    for fields in parsed:
        workout = Workout(
            user_id=current_user.id,
            calories_burned=estimator.estimate(fields['sets'], fields['reps'], fields['weight'], fields['duration']),
            **fields
        )
        db.session.add(workout)
        workouts.append(workout)

    db.session.commit()

    if from_text:
        return jsonify({
            'message': 'Workouts added successfully',
            'workouts': [w.to_dict() for w in workouts]
        }), 201

    return jsonify({
        'message': 'Workout added successfully',
        'workout': workouts[0].to_dict()
    }), 201

@app.route('/api/user/workouts/<int:workout_id>')
@login_required
def get_workout(workout_id):
    workout = Workout.query.filter_by(id=workout_id, user_id=current_user.id).first_or_404()
    return jsonify(workout.to_dict())

@app.route('/api/user/workouts/<int:workout_id>', methods=['DELETE'])
@login_required
def delete_workout(workout_id):
    workout = Workout.query.filter_by(id=workout_id, user_id=current_user.id).first_or_404()
    db.session.delete(workout)
    db.session.commit()
    return jsonify({'success': True})

# ===== CALORIE CALCULATOR =====

@app.route('/api/calories/daily-needs', methods=['POST'])
def daily_needs():
    data = request.get_json(silent=True) or {}
    result = calculate_daily_calories(
        weight=data.get('weight'),
        height=data.get('height'),
        age=data.get('age'),
        gender=data.get('gender', 'male'),
        activity_level=data.get('activityLevel', 'moderate'),
        unit=data.get('unit', 'metric')
    )
    return jsonify(result)

if __name__ == '__main__':
    app.run(debug=True, host='0.0.0.0', port=5000)
