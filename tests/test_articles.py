"""
Tests for article endpoints
"""

import base64
import io

import pytest
from PIL import Image

from warpblog.models import Article, Attachment, Text
from warpblog.utils.helpers import now_millis


def png_base64(width=4, height=3, color='red'):
    buf = io.BytesIO()
    Image.new('RGB', (width, height), color).save(buf, format='PNG')
    return base64.b64encode(buf.getvalue()).decode('ascii')


def article_payload(category, **kwargs):
    payload = {
        'category_id': category.id,
        'name': 'First post',
        'description': 'A short summary',
        'content': '# Hello\n\nworld',
    }
    payload.update(kwargs)
    return payload


class TestCreateArticle:

    def test_create(self, login, users, make_category):
        category = make_category('Python')
        response = login('editor').post('/api/articles', json=article_payload(
            category, tags=' python , flask,python,, '))
        assert response.status_code == 200
        data = response.get_json()
        assert data['name'] == 'First post'
        assert data['tags'] == 'python,flask'
        assert data['user_id'] == users['editor'].id
        assert data['user_name'] == users['editor'].name
        assert data['content'] == '# Hello\n\nworld'
        assert data['cover_id'] is None

        text = Text.query.filter_by(ref_id=data['id']).one()
        assert text.id == data['content_id']
        assert text.value == '# Hello\n\nworld'

    def test_publish_at_defaults_to_now(self, login, make_category):
        category = make_category('Python')
        before = now_millis()
        data = login('editor').post('/api/articles', json=article_payload(category)).get_json()
        assert before <= data['publish_at'] <= now_millis()

    def test_explicit_publish_at(self, login, make_category):
        category = make_category('Python')
        data = login('admin').post('/api/articles', json=article_payload(
            category, publish_at=1609459200000)).get_json()
        assert data['publish_at'] == 1609459200000

    def test_create_with_cover(self, login, make_category):
        category = make_category('Python')
        response = login('editor').post('/api/articles', json=article_payload(
            category, image=png_base64(8, 6)))
        assert response.status_code == 200
        cover_id = response.get_json()['cover_id']
        assert cover_id is not None

        file_response = login('subscriber').get(f'/files/attachments/{cover_id}')
        assert file_response.status_code == 200
        assert file_response.mimetype == 'image/png'
        assert Image.open(io.BytesIO(file_response.data)).size == (8, 6)

    def test_invalid_image_rolls_back(self, login, make_category):
        category = make_category('Python')
        not_an_image = base64.b64encode(b'plain text').decode('ascii')
        response = login('editor').post('/api/articles', json=article_payload(category, image=not_an_image))
        assert response.status_code == 400
        assert response.get_json()['data'] == 'image'
        assert Article.query.count() == 0
        assert Attachment.query.count() == 0

    def test_unknown_category(self, login, make_category):
        category = make_category('Python')
        payload = article_payload(category, category_id=category.id + 100)
        response = login('editor').post('/api/articles', json=payload)
        assert response.status_code == 404
        assert response.get_json()['data'] == 'Category'
        assert Article.query.count() == 0

    @pytest.mark.parametrize('missing', ['category_id', 'name', 'description', 'content'])
    def test_required_fields(self, login, make_category, missing):
        category = make_category('Python')
        payload = article_payload(category)
        del payload[missing]
        response = login('editor').post('/api/articles', json=payload)
        assert response.status_code == 400
        assert response.get_json()['data'] == missing

    @pytest.mark.parametrize('field, value', [
        ('tags', ['a', 'b']),
        ('name', {'text': 'x'}),
    ])
    def test_non_scalar_value_rejected(self, login, make_category, field, value):
        category = make_category('Python')
        response = login('editor').post('/api/articles', json=article_payload(category, **{field: value}))
        assert response.status_code == 400
        assert response.get_json()['data'] == field
        assert Article.query.count() == 0

    def test_blank_name(self, login, make_category):
        category = make_category('Python')
        response = login('editor').post('/api/articles', json=article_payload(category, name='   '))
        assert response.status_code == 400
        assert response.get_json()['data'] == 'name'

    @pytest.mark.parametrize('role', ['contributor', 'subscriber'])
    def test_requires_editor(self, login, make_category, role):
        category = make_category('Python')
        response = login(role).post('/api/articles', json=article_payload(category))
        assert response.status_code == 403
        assert Article.query.count() == 0


class TestArticleVisibility:

    @pytest.fixture
    def future_article(self, users, make_category, make_article):
        category = make_category('Python')
        return make_article(users['editor'], category, name='Future', publish_at=now_millis() + 1000 * 1000)

    def test_anonymous_cannot_see_future(self, client, future_article):
        response = client.get(f'/api/articles/{future_article.id}')
        assert response.status_code == 404
        assert response.get_json()['error'] == 'resource:notfound'

    def test_subscriber_cannot_see_future(self, login, future_article):
        response = login('subscriber').get(f'/api/articles/{future_article.id}')
        assert response.status_code == 404

    @pytest.mark.parametrize('role', ['contributor', 'editor', 'admin'])
    def test_contributor_and_above_see_future(self, login, future_article, role):
        response = login(role).get(f'/api/articles/{future_article.id}')
        assert response.status_code == 200
        assert response.get_json()['name'] == 'Future'

    def test_published_visible_to_anonymous(self, client, users, make_category, make_article):
        article = make_article(users['editor'], make_category('Python'), content='Some **bold**')
        response = client.get(f'/api/articles/{article.id}')
        assert response.status_code == 200
        assert response.get_json()['content'] == 'Some **bold**'

    def test_html_format(self, client, users, make_category, make_article):
        article = make_article(users['editor'], make_category('Python'), content='Some **bold** <i>x</i>')
        response = client.get(f'/api/articles/{article.id}?format=html')
        content = response.get_json()['content']
        assert '<strong>bold</strong>' in content
        assert '<i>' not in content

    def test_not_found(self, client):
        assert client.get('/api/articles/999').status_code == 404

    def test_list_hides_future_from_anonymous(self, client, users, make_category, make_article, future_article):
        make_article(users['editor'], make_category('Other'), name='Past')
        data = client.get('/api/articles').get_json()
        assert [a['name'] for a in data['articles']] == ['Past']
        assert data['page']['total'] == 1

    def test_list_includes_future_for_contributor(self, login, users, make_category, make_article, future_article):
        make_article(users['editor'], make_category('Other'), name='Past')
        data = login('contributor').get('/api/articles').get_json()
        assert [a['name'] for a in data['articles']] == ['Future', 'Past']

    def test_list_pagination(self, client, users, make_category, make_article):
        category = make_category('Python')
        now = now_millis()
        for i in range(12):
            make_article(users['editor'], category, name=f'Post {i}', publish_at=now - 10000 + i)
        data = client.get('/api/articles?page=2').get_json()
        assert data['page'] == {'index': 2, 'size': 10, 'total': 12, 'pages': 2}
        assert [a['name'] for a in data['articles']] == ['Post 1', 'Post 0']

    def test_category_articles(self, client, users, make_category, make_article, future_article):
        python = make_category('Python2')
        make_article(users['editor'], python, name='In python')
        make_article(users['editor'], make_category('Other'), name='Elsewhere')
        data = client.get(f'/api/categories/{python.id}/articles').get_json()
        assert [a['name'] for a in data['articles']] == ['In python']

    def test_hidden_article_without_text_reports_article(self, db, client, future_article):
        Text.query.filter_by(ref_id=future_article.id).delete()
        db.session.commit()

        response = client.get(f'/api/articles/{future_article.id}')
        assert response.status_code == 404
        assert response.get_json()['data'] == 'Article'

    def test_publish_boundary_consistent(self, client, users, make_category, make_article, monkeypatch):
        publish_at = now_millis() - 5000
        article = make_article(users['editor'], make_category('Python'), name='Boundary', publish_at=publish_at)
        monkeypatch.setattr('warpblog.services.article_service.now_millis', lambda: publish_at)

        assert client.get(f'/api/articles/{article.id}').status_code == 404
        assert client.get('/api/articles').get_json()['articles'] == []

        monkeypatch.setattr('warpblog.services.article_service.now_millis', lambda: publish_at + 1)
        assert client.get(f'/api/articles/{article.id}').status_code == 200
        assert [a['name'] for a in client.get('/api/articles').get_json()['articles']] == ['Boundary']


class TestUpdateArticle:

    @pytest.fixture
    def article(self, users, make_category, make_article):
        return make_article(users['editor'], make_category('Python'), name='Original', content='v1')

    def test_owner_can_update(self, login, article):
        response = login('editor').post(f'/api/articles/{article.id}', json={'name': 'Renamed'})
        assert response.status_code == 200
        data = response.get_json()
        assert data['name'] == 'Renamed'
        assert data['content'] == 'v1'

    def test_admin_can_update(self, login, article):
        response = login('admin').post(f'/api/articles/{article.id}', json={'tags': 'a, ,b,,a'})
        assert response.status_code == 200
        assert response.get_json()['tags'] == 'a,b'

    def test_other_editor_denied(self, login, article):
        response = login('other_editor').post(f'/api/articles/{article.id}', json={'name': 'Hijacked'})
        assert response.status_code == 403
        assert Article.query.filter_by(id=article.id).one().name == 'Original'

    def test_blank_name_rejected(self, login, article):
        response = login('editor').post(f'/api/articles/{article.id}', json={'name': ''})
        assert response.status_code == 400
        assert response.get_json()['data'] == 'name'

    def test_unknown_category_rejected(self, login, article):
        response = login('editor').post(f'/api/articles/{article.id}', json={'category_id': 999})
        assert response.status_code == 404

    def test_content_creates_new_text(self, login, article):
        old_content_id = article.content_id
        response = login('editor').post(f'/api/articles/{article.id}', json={'content': 'v2'})
        data = response.get_json()
        assert data['content'] == 'v2'
        assert data['content_id'] != old_content_id
        assert Text.query.filter_by(ref_id=article.id).count() == 2

        fetched = login('subscriber').get(f'/api/articles/{article.id}').get_json()
        assert fetched['content'] == 'v2'

    def test_new_cover_replaces_old(self, login, article):
        editor = login('editor')
        first = editor.post(f'/api/articles/{article.id}', json={'image': png_base64(color='red')}).get_json()
        second = editor.post(f'/api/articles/{article.id}', json={'image': png_base64(color='blue')}).get_json()

        assert first['cover_id'] != second['cover_id']
        assert Attachment.query.filter_by(id=first['cover_id']).count() == 0
        assert Attachment.query.filter_by(id=second['cover_id']).count() == 1

    def test_not_found(self, login, users):
        response = login('editor').post('/api/articles/999', json={'name': 'x'})
        assert response.status_code == 404


class TestDeleteArticle:

    @pytest.fixture
    def article(self, login, make_category):
        category = make_category('Python')
        response = login('editor').post('/api/articles', json=article_payload(category, image=png_base64()))
        return response.get_json()

    def test_owner_deletes_with_texts_and_cover(self, login, article):
        editor = login('editor')
        editor.post(f"/api/articles/{article['id']}", json={'content': 'v2'})

        response = editor.post(f"/api/articles/{article['id']}/delete")
        assert response.status_code == 200
        assert response.get_json() == {'id': article['id']}
        assert Article.query.filter_by(id=article['id']).count() == 0
        assert Text.query.filter_by(ref_id=article['id']).count() == 0
        assert Attachment.query.filter_by(id=article['cover_id']).count() == 0

    def test_admin_can_delete(self, login, article):
        response = login('admin').post(f"/api/articles/{article['id']}/delete")
        assert response.status_code == 200

    def test_other_editor_denied(self, login, article):
        response = login('other_editor').post(f"/api/articles/{article['id']}/delete")
        assert response.status_code == 403
        assert Article.query.filter_by(id=article['id']).count() == 1

    def test_not_found(self, login, users):
        assert login('admin').post('/api/articles/999/delete').status_code == 404
