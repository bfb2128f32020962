"""
API Tests for meal ratings
"""
from datetime import date

import pytest

from conftest import login
from smartmess.core.exceptions import NotFoundError
from smartmess.schemas.rating import RatingSubmit
from smartmess.services import RatingService


@pytest.fixture
def menu(menu_factory):
    return menu_factory(date(2024, 1, 10), lunch=['Rice', 'Dal'])


def rate(client, headers, menu_id, meal_type='lunch', rating=4, comment=None):
    payload = {'menuId': menu_id, 'mealType': meal_type, 'rating': rating}
    if comment is not None:
        payload['comment'] = comment
    return client.post('/api/ratings', json=payload, headers=headers)


class TestSubmitRating:
    """Test one rating per student, menu and meal"""

    def test_second_submission_replaces_the_first(self, client, student_headers, verified_student, menu):
        first = rate(client, student_headers, menu['id'], rating=4, comment='ok')
        second = rate(client, student_headers, menu['id'], rating=2, comment='bad')

        assert first.status_code == 201
        assert second.status_code == 200
        assert second.json()['message'] == 'Rating updated successfully'
        assert second.json()['data']['id'] == first.json()['data']['id']

        mine = client.get('/api/ratings/my-ratings', headers=student_headers).json()['data']
        assert len(mine) == 1
        assert mine[0]['rating'] == 2
        assert mine[0]['comment'] == 'bad'
        assert mine[0]['studentId'] == verified_student['id']

    def test_out_of_range_rating_leaves_existing_row(self, client, student_headers, menu):
        rate(client, student_headers, menu['id'], rating=4)

        for value in (0, 6):
            response = rate(client, student_headers, menu['id'], rating=value)
            assert response.status_code == 400
            assert response.json()['errorCode'] == 'VALIDATION_ERROR'

        mine = client.get('/api/ratings/my-ratings', headers=student_headers).json()['data']
        assert [r['rating'] for r in mine] == [4]

    def test_unknown_meal_type_and_long_comment(self, client, student_headers, menu):
        assert rate(client, student_headers, menu['id'], meal_type='brunch').status_code == 400
        assert rate(client, student_headers, menu['id'], comment='x' * 501).status_code == 400

    def test_unknown_menu(self, client, student_headers):
        response = rate(client, student_headers, 'no-such-menu')

        assert response.status_code == 404
        assert response.json()['message'] == 'Menu not found'

    def test_menu_removed_before_insert_reports_missing_menu(self, database, settings, verified_student):
        with database.session() as db:
            service = RatingService(db, settings)
            lookups = iter([object()])
            real_get = service.menus.get
            # the first lookup still sees the menu, later ones do not
            service.menus.get = lambda menu_id: next(lookups, None) or real_get(menu_id)

            with pytest.raises(NotFoundError):
                service.submit(
                    verified_student['id'], RatingSubmit(menu_id='gone-menu', meal_type='lunch', rating=4)
                )

    def test_different_meals_are_separate(self, client, student_headers, menu):
        rate(client, student_headers, menu['id'], meal_type='lunch')
        rate(client, student_headers, menu['id'], meal_type='dinner')

        assert len(client.get('/api/ratings/my-ratings', headers=student_headers).json()['data']) == 2

    def test_student_namespace_submit(self, client, student_headers, menu):
        response = client.post(
            '/api/student/rating',
            json={'menuId': menu['id'], 'mealType': 'snacks', 'rating': 5},
            headers=student_headers,
        )
        assert response.status_code == 201

    def test_admins_cannot_rate(self, client, admin_headers, menu):
        assert rate(client, admin_headers, menu['id']).status_code == 403


class TestMyRatings:
    def test_includes_menu_context(self, client, student_headers, menu):
        rate(client, student_headers, menu['id'], meal_type='lunch')

        rating = client.get('/api/ratings/my-ratings', headers=student_headers).json()['data'][0]

        assert rating['menuDate'] == '2024-01-10'
        assert rating['menuItems'] == ['Rice', 'Dal']


class TestRatingOwnership:
    """Test that ratings of other students look absent"""

    def test_owner_can_read_update_delete(self, client, student_headers, menu):
        rating_id = rate(client, student_headers, menu['id']).json()['data']['id']

        assert client.get(f'/api/ratings/{rating_id}', headers=student_headers).status_code == 200
        updated = client.put(f'/api/ratings/{rating_id}', json={'rating': 5, 'comment': 'great'}, headers=student_headers)
        assert updated.status_code == 200
        assert updated.json()['data']['rating'] == 5
        assert client.delete(f'/api/ratings/{rating_id}', headers=student_headers).status_code == 200
        assert client.get(f'/api/ratings/{rating_id}', headers=student_headers).status_code == 404

    def test_other_student_gets_not_found(self, client, student_headers, other_student_headers, menu):
        rating_id = rate(client, student_headers, menu['id'], rating=3).json()['data']['id']

        assert client.get(f'/api/ratings/{rating_id}', headers=other_student_headers).status_code == 404
        assert client.put(
            f'/api/ratings/{rating_id}', json={'rating': 1}, headers=other_student_headers
        ).status_code == 404
        assert client.delete(f'/api/ratings/{rating_id}', headers=other_student_headers).status_code == 404

        still = client.get(f'/api/ratings/{rating_id}', headers=student_headers).json()['data']
        assert still['rating'] == 3

    def test_admin_can_read_any_rating(self, client, student_headers, admin_headers, menu):
        rating_id = rate(client, student_headers, menu['id']).json()['data']['id']
        assert client.get(f'/api/ratings/{rating_id}', headers=admin_headers).status_code == 200


class TestRatingAggregates:
    """Test meal averages and analytics"""

    def test_meal_without_ratings(self, client, student_headers, menu):
        response = client.get(f"/api/ratings/meal/{menu['id']}/dinner", headers=student_headers)

        data = response.json()['data']
        assert data == {'ratings': [], 'average': 0, 'count': 0}

    def test_meal_average_rounded(self, client, student_factory, menu):
        for value in (4, 4, 5):
            student = student_factory()
            rate(client, login(client, student['email'], student['password']), menu['id'], rating=value)

        headers = login(client, student['email'], student['password'])
        data = client.get(f"/api/ratings/meal/{menu['id']}/lunch", headers=headers).json()['data']

        assert data['count'] == 3
        assert data['average'] == 4.3
        assert {r['studentName'] for r in data['ratings']} >= {student['name']}

    def test_analytics_distribution(self, client, student_headers, other_student_headers, admin_headers, menu):
        rate(client, student_headers, menu['id'], meal_type='lunch', rating=5)
        rate(client, other_student_headers, menu['id'], meal_type='lunch', rating=2)
        rate(client, student_headers, menu['id'], meal_type='dinner', rating=3)

        stats = client.get('/api/ratings/analytics/average', headers=admin_headers).json()['data']
        by_meal = {s['mealType']: s for s in stats}

        assert set(by_meal) == {'breakfast', 'lunch', 'snacks', 'dinner'}
        assert by_meal['lunch']['count'] == 2
        assert by_meal['lunch']['average'] == 3.5
        assert by_meal['lunch']['distribution'] == {'1': 0, '2': 1, '3': 0, '4': 0, '5': 1}
        assert by_meal['breakfast'] == {
            'mealType': 'breakfast', 'average': 0, 'count': 0,
            'distribution': {'1': 0, '2': 0, '3': 0, '4': 0, '5': 0},
        }
        assert client.get('/api/admin/ratings/stats', headers=admin_headers).json()['data'] == stats

    def test_analytics_requires_admin(self, client, student_headers):
        assert client.get('/api/ratings/analytics/average', headers=student_headers).status_code == 403


class TestAdminRatingList:
    def test_detailed_listing_and_filters(self, client, student_headers, verified_student, admin_headers, menu):
        rate(client, student_headers, menu['id'], meal_type='lunch', rating=4)
        rate(client, student_headers, menu['id'], meal_type='dinner', rating=2)

        everything = client.get('/api/ratings/all', headers=admin_headers).json()['data']
        lunch = client.get('/api/admin/ratings', params={'mealType': 'lunch'}, headers=admin_headers).json()['data']
        limited = client.get('/api/admin/ratings', params={'limit': 1}, headers=admin_headers).json()['data']
        old = client.get(
            '/api/admin/ratings', params={'endDate': '2020-01-01'}, headers=admin_headers
        ).json()['data']

        assert len(everything) == 2
        assert everything[0]['studentEmail'] == verified_student['email']
        assert everything[0]['rollNumber'] == verified_student['roll_number']
        assert everything[0]['menuDate'] == '2024-01-10'
        assert everything[0]['dayOfWeek'] == 'Wednesday'
        assert [r['mealType'] for r in lunch] == ['lunch']
        assert len(limited) == 1
        assert old == []

    def test_limit_bounds(self, client, admin_headers):
        assert client.get('/api/admin/ratings', params={'limit': 0}, headers=admin_headers).status_code == 400
