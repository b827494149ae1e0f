from datetime import datetime, timedelta

import pytest

from conftest import signup
from models import db, User, Workout
from utils import start_of_day

BENCH_PRESS = {
    'category': 'Push',
    'workoutName': 'Bench Press',
    'sets': 4,
    'reps': 10,
    'weight': 50,
    'duration': 30,
}


def workout_count(app):
    with app.app_context():
        return db.session.query(Workout).count()


# ===== AUTHENTICATION =====

def test_signup_logs_user_in(client):
    response = signup(client)
    assert response.status_code == 200
    assert response.get_json()['user']['email'] == 'alex@example.com'
    assert 'password_hash' not in response.get_json()['user']

    assert client.get('/api/user/dashboard').status_code == 200


def test_signup_validation(client):
    assert signup(client, password='123').status_code == 400
    assert signup(client, email='not-an-email').status_code == 400
    assert signup(client, name=' A ').status_code == 400
    assert client.post('/api/user/signup', json={'email': 'a@b.co'}).status_code == 400


def test_signup_duplicate_email(client):
    signup(client)
    response = signup(client, name='Another Alex')
    assert response.status_code == 409
    assert response.get_json()['message'] == 'Email is already in use.'


def test_signin(client):
    signup(client)
    client.post('/api/user/logout')

    assert client.post('/api/user/signin', json={'email': 'nobody@example.com', 'password': 'secret123'}).status_code == 404
    assert client.post('/api/user/signin', json={'email': 'alex@example.com', 'password': 'wrong-pass'}).status_code == 403
    assert client.post('/api/user/signin', json={'email': 'alex@example.com'}).status_code == 400

    response = client.post('/api/user/signin', json={'email': 'alex@example.com', 'password': 'secret123'})
    assert response.status_code == 200
    assert response.get_json()['user']['name'] == 'Alex'


def test_user_routes_require_login(client):
    assert client.get('/api/user/dashboard').status_code == 401
    assert client.get('/api/user/workout').status_code == 401
    assert client.post('/api/user/workout', json=BENCH_PRESS).status_code == 401


# ===== WORKOUTS =====

def test_add_workout_computes_calories(auth_client):
    response = auth_client.post('/api/user/workout', json=BENCH_PRESS)

    assert response.status_code == 201
    workout = response.get_json()['workout']
    assert workout['workoutName'] == 'Bench Press'
    assert workout['caloriesBurned'] == 245.0


def test_add_workout_missing_fields_saves_nothing(app, auth_client):
    response = auth_client.post('/api/user/workout', json={'workoutName': 'Bench Press', 'sets': 4})
    assert response.status_code == 400
    assert response.get_json()['success'] is False

    response = auth_client.post('/api/user/workout', json={'category': 'Push', 'workoutName': 'Bench Press'})
    assert response.status_code == 400

    assert workout_count(app) == 0


def test_add_workouts_from_text(auth_client):
    text = (
        "#Legs\n-Back Squat\n-5 setsX15 reps\n-30 kg\n-10 min\n;"
        "\n-Leg Press\n-4\n-12\n-80\n-15"
    )
    response = auth_client.post('/api/user/workout', json={'workoutString': text})

    assert response.status_code == 201
    workouts = response.get_json()['workouts']
    assert [w['workoutName'] for w in workouts] == ['Back Squat', 'Leg Press']
    assert all(w['category'] == 'Legs' for w in workouts)


def test_bad_workout_text_saves_nothing(app, auth_client):
    text = "#Legs\n-Back Squat\n-5 setsX15 reps\n-30 kg\n-10 min;\n-Lunges\n-lots\n-10 kg\n-5 min"
    response = auth_client.post('/api/user/workout', json={'workoutString': text})

    assert response.status_code == 400
    assert 'Invalid sets/reps format' in response.get_json()['message']
    assert workout_count(app) == 0


def test_profile_weight_used_when_enabled(app, client):
    signup(client, weight=80)
    app.config['USE_PROFILE_WEIGHT'] = True

    response = client.post('/api/user/workout', json=BENCH_PRESS)
    assert response.get_json()['workout']['caloriesBurned'] == 280.0


def test_get_workouts_by_date(auth_client):
    auth_client.post('/api/user/workout', json=BENCH_PRESS)
    auth_client.post('/api/user/workout', json=dict(BENCH_PRESS, workoutName='Dips', weight=0, duration=15))
    auth_client.post('/api/user/workout', json=dict(BENCH_PRESS, date='01/15/2026'))

    today = auth_client.get('/api/user/workout').get_json()
    assert len(today['todaysWorkouts']) == 2
    assert today['totalCaloriesBurnt'] == 245.0 + 70.0

    past = auth_client.get('/api/user/workout?date=2026-01-15').get_json()
    assert [w['workoutName'] for w in past['todaysWorkouts']] == ['Bench Press']

    assert auth_client.get('/api/user/workout?date=someday').status_code == 400


def test_workouts_are_scoped_to_owner(client):
    signup(client)
    workout_id = client.post('/api/user/workout', json=BENCH_PRESS).get_json()['workout']['id']
    assert client.get(f'/api/user/workouts/{workout_id}').status_code == 200
    client.post('/api/user/logout')

    signup(client, email='sam@example.com', name='Sam')
    assert client.get(f'/api/user/workouts/{workout_id}').status_code == 404
    assert client.delete(f'/api/user/workouts/{workout_id}').status_code == 404
    assert client.get('/api/user/workout').get_json()['todaysWorkouts'] == []


def test_delete_workout(app, auth_client):
    workout_id = auth_client.post('/api/user/workout', json=BENCH_PRESS).get_json()['workout']['id']
    assert auth_client.delete(f'/api/user/workouts/{workout_id}').status_code == 200
    assert workout_count(app) == 0


# ===== DASHBOARD =====

def test_dashboard(auth_client):
    three_days_ago = start_of_day(datetime.now() - timedelta(days=3)) + timedelta(hours=12)
    auth_client.post('/api/user/workout', json=dict(BENCH_PRESS, date=three_days_ago.isoformat()))
    auth_client.post('/api/user/workout', json=BENCH_PRESS)
    auth_client.post('/api/user/workout', json=dict(BENCH_PRESS, category='Legs', workoutName='Squat'))

    data = auth_client.get('/api/user/dashboard').get_json()

    assert data['totalCaloriesBurnt'] == 490.0
    assert data['totalWorkouts'] == 2
    assert data['avgCaloriesBurntPerWorkout'] == 245.0
    assert [p['label'] for p in data['pieChartData']] == ['Push', 'Legs']

    weekly = data['totalWeeksCaloriesBurnt']
    assert weekly['weeks'][-1] == f"{datetime.now().day}th"
    assert weekly['caloriesBurned'] == [0, 0, 0, 245.0, 0, 0, 490.0]


def test_empty_dashboard(auth_client):
    data = auth_client.get('/api/user/dashboard').get_json()
    assert data['totalWorkouts'] == 0
    assert data['avgCaloriesBurntPerWorkout'] == 0
    assert data['totalWeeksCaloriesBurnt']['caloriesBurned'] == [0] * 7


# ===== CALORIE CALCULATOR =====

def test_daily_needs_endpoint(client):
    response = client.post('/api/calories/daily-needs', json={
        'weight': 70, 'height': 175, 'age': 30, 'gender': 'male', 'activityLevel': 'moderate'
    })
    assert response.status_code == 200
    assert response.get_json()['maintenance'] == 2556

    response = client.post('/api/calories/daily-needs', json={'weight': 70})
    assert response.status_code == 400


# ===== REQUEST TYPING =====

@pytest.mark.parametrize('overrides', [
    {'email': 5},
    {'password': 12345678},
    {'name': ['Alex']},
])
def test_signup_rejects_non_string_fields(app, client, overrides):
    response = signup(client, **overrides)
    assert response.status_code == 400
    assert response.get_json()['message'] == 'Name, email, and password are required'
    with app.app_context():
        assert db.session.query(User).count() == 0


def test_signup_rejects_bad_body_weight(client):
    assert signup(client, weight=10 ** 400).status_code == 400
    assert signup(client, weight='heavy').status_code == 400
    assert signup(client, weight=-80).status_code == 400


def test_signin_rejects_non_string_fields(client):
    signup(client)
    client.post('/api/user/logout')

    response = client.post('/api/user/signin', json={'email': ['alex@example.com'], 'password': 'secret123'})
    assert response.status_code == 400
    assert response.get_json()['message'] == 'Email and password are required'

    assert client.post('/api/user/signin', json=['alex@example.com', 'secret123']).status_code == 400


def test_add_workout_rejects_oversized_numbers(app, auth_client):
    body = ('{"category": "Pull", "workoutName": "Deadlift", "sets": 1' + '0' * 400
            + ', "reps": 5, "weight": 100, "duration": 20}')
    response = auth_client.post('/api/user/workout', data=body, content_type='application/json')
    assert response.status_code == 400

    response = auth_client.post('/api/user/workout', json=dict(BENCH_PRESS, sets=10 ** 20))
    assert response.status_code == 400

    response = auth_client.post('/api/user/workout', json=dict(BENCH_PRESS, weight=10 ** 400))
    assert response.status_code == 400

    assert workout_count(app) == 0
