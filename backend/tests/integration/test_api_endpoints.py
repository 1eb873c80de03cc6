"""
Integration Tests for the HTTP API
"""
import uuid

from calcbuilder.formbuilder.field_catalog import FIELD_TYPES


def create_calculator(client, tenant_id, name='Hemstädning'):
    response = client.post('/api/v1/calculators/', json={'tenant_id': str(tenant_id), 'name': name})
    assert response.status_code == 201
    return response.json()


class TestMeta:

    def test_health(self, client):
        response = client.get('/health')
        assert response.status_code == 200
        assert response.json()['status'] == 'healthy'
        assert 'x-process-time' in response.headers

    def test_root(self, client):
        assert client.get('/').json()['docs'] == '/docs'

    def test_database_endpoints(self, client):
        assert client.get('/api/v1/database/connection').json()['status'] == 'connected'
        assert client.get('/api/v1/database/health').json()['status'] == 'healthy'


class TestFieldTypes:

    def test_catalog(self, client):
        data = client.get('/api/v1/field-types/').json()
        assert data['total'] == len(FIELD_TYPES)
        assert data['field_types'][6] == {'type': 'zipCode', 'label': 'ZIP Code'}

    def test_palette(self, client):
        data = client.get('/api/v1/field-types/palette').json()
        assert data['title'] == 'Elements'
        assert [t['id'] for t in data['tokens']] == [f.type for f in FIELD_TYPES]
        assert not any(t['lifted'] for t in data['tokens'])


class TestTenants:

    def test_create_and_fetch(self, client):
        payload = {
            'name': 'Städproffs Stockholm AB',
            'slug': 'stadproffs-stockholm',
            'admin_email': 'admin@stadproffs.se',
            'zip_areas': [' 11120', '', '11121 '],
        }
        response = client.post('/api/v1/tenants/', json=payload)
        assert response.status_code == 201
        tenant = response.json()
        assert tenant['zip_areas'] == ['11120', '11121']
        assert tenant['is_active'] is True

        assert client.get(f"/api/v1/tenants/{tenant['id']}").json()['slug'] == 'stadproffs-stockholm'
        assert client.get('/api/v1/tenants/').json()['total'] == 1

        duplicate = client.post('/api/v1/tenants/', json=payload)
        assert duplicate.status_code == 409

    def test_invalid_payloads(self, client):
        response = client.post('/api/v1/tenants/', json={
            'name': 'X', 'slug': 'x', 'admin_email': 'not-an-email'
        })
        assert response.status_code == 422
        response = client.post('/api/v1/tenants/', json={
            'name': 'X', 'slug': 'bad slug!', 'admin_email': 'x@stadproffs.se'
        })
        assert response.status_code == 422

    def test_missing_tenant(self, client):
        assert client.get(f'/api/v1/tenants/{uuid.uuid4()}').status_code == 404
        assert client.get('/api/v1/tenants/not-a-uuid').status_code == 422

    def test_users_and_super_admin(self, client, tenant):
        response = client.post(f'/api/v1/tenants/{tenant.id}/users', json={
            'email': 'erik@rengoring-plus.se', 'display_name': 'Erik Eriksson'
        })
        assert response.status_code == 201
        user = response.json()
        assert user['role'] == 'tenant_admin'
        assert user['tenant_id'] == str(tenant.id)

        promoted = client.post(f"/api/v1/tenants/users/{user['id']}/super-admin").json()
        assert promoted['role'] == 'super_admin'
        assert promoted['tenant_id'] is None

        again = client.post(f'/api/v1/tenants/{tenant.id}/users', json={'email': 'erik@rengoring-plus.se'})
        assert again.status_code == 409
        missing = client.post(f'/api/v1/tenants/{uuid.uuid4()}/users', json={'email': 'new@rengoring-plus.se'})
        assert missing.status_code == 404

    def test_overview(self, client, tenant):
        create_calculator(client, tenant.id)
        overview = client.get('/api/v1/tenants/overview').json()['tenants']
        assert overview[0]['calculators'][0]['slug'] == 'hemstadning'


class TestCalculators:

    def test_create_get_list(self, client, tenant):
        calc = create_calculator(client, tenant.id)
        assert calc['slug'] == 'hemstadning'
        assert calc['config']['zipAreas'] == ['41107', '41121', '41254']

        assert client.get(f"/api/v1/calculators/{calc['id']}").json()['id'] == calc['id']
        listing = client.get('/api/v1/calculators/', params={'tenant_id': str(tenant.id)}).json()
        assert listing['total'] == 1

        conflict = client.post('/api/v1/calculators/', json={'tenant_id': str(tenant.id), 'name': 'Hemstädning'})
        assert conflict.status_code == 409

    def test_create_for_missing_tenant(self, client):
        response = client.post('/api/v1/calculators/', json={'tenant_id': str(uuid.uuid4()), 'name': 'X'})
        assert response.status_code == 404

    def test_zip_validation_flow(self, client, bare_tenant):
        calc = create_calculator(client, bare_tenant.id)
        url = f"/api/v1/calculators/{calc['id']}/zip-validation"

        response = client.put(url, json={'enabled': True, 'raw_input': '41107, 41121, 41254'})
        assert response.status_code == 200
        assert response.json()['zip_areas'] == ['41107', '41121', '41254']

        response = client.put(url, json={'enabled': True, 'raw_input': ''})
        assert response.json()['zip_areas'] == []

        client.put(url, json={'enabled': True, 'raw_input': '41107,, 41107'})
        stored = client.get(f"/api/v1/calculators/{calc['id']}").json()
        assert stored['config']['zipAreas'] == ['41107', '41107']

        response = client.put(url, json={'enabled': False, 'raw_input': '41107'})
        assert response.json()['state'] == 'disabled'
        stored = client.get(f"/api/v1/calculators/{calc['id']}").json()
        assert stored['config']['zipAreas'] == []

    def test_config_patch(self, client, tenant):
        calc = create_calculator(client, tenant.id)
        url = f"/api/v1/calculators/{calc['id']}/config"
        response = client.patch(url, json={'changes': {'zipAreas': ['11120']}})
        assert response.status_code == 200
        assert response.json()['config']['zipAreas'] == ['11120']

        response = client.patch(url, json={'changes': {'colour': 'blue'}})
        assert response.status_code == 400

        response = client.patch(url, json={'changes': {'status': 'published', 'name': ''}})
        assert response.status_code == 400
        stored = client.get(f"/api/v1/calculators/{calc['id']}").json()
        assert stored['status'] == 'draft'
        assert stored['is_published'] is False
        assert stored['published_at'] is None

        response = client.patch(url, json={'changes': {'slug': 'veckostad'}})
        assert response.json()['slug'] == 'veckostad'
        create_calculator(client, tenant.id, name='Fönsterputs')
        response = client.patch(url, json={'changes': {'slug': 'fonsterputs'}})
        assert response.status_code == 409
        missing = client.patch(f'/api/v1/calculators/{uuid.uuid4()}/config', json={'changes': {}})
        assert missing.status_code == 404

    def test_fields(self, client, tenant):
        calc = create_calculator(client, tenant.id)
        base = f"/api/v1/calculators/{calc['id']}/fields"

        first = client.post(base, json={'field_type': 'text'})
        assert first.status_code == 201
        assert first.json()['type'] == 'text'
        second = client.post(base, json={'field_type': 'slider'}).json()

        moved = client.post(f'{base}/move', json={'old_index': 1, 'new_index': 0}).json()
        assert [f['id'] for f in moved['fields']] == [second['id'], first.json()['id']]

        assert client.post(base, json={'field_type': 'signature'}).status_code == 400
        assert client.post(f'{base}/move', json={'old_index': 0, 'new_index': 9}).status_code == 400

        deleted = client.delete(f'{base}/0').json()
        assert deleted['deleted']['id'] == second['id']
        assert client.delete(f'{base}/5').status_code == 404

    def test_publish(self, client, tenant):
        calc = create_calculator(client, tenant.id)
        response = client.post(f"/api/v1/calculators/{calc['id']}/publish")
        assert response.status_code == 200
        assert response.json()['status'] == 'published'
        assert response.json()['published_at'] is not None
        assert response.json()['is_published'] is True
