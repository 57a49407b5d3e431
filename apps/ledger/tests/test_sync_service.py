import pytest
from apps.ledger.entities import LABOUR_WAGES, OUTPUTS, PURCHASE_INPUTS, PurchaseInput
from apps.ledger.exceptions import NotFoundError
from apps.ledger.sync import LoadSource, SyncOutcome, SyncService


# =============================================================================
# Read path
# =============================================================================

class TestLoad:

    def test_load_from_server(self, sync_service, remote, fallback_cache, make_purchase):
        remote.rows['purchase_inputs'] = [make_purchase(id='a'), make_purchase(id='b')]

        source = sync_service.load(PURCHASE_INPUTS)

        assert source is LoadSource.SERVER
        assert [r.id for r in sync_service.records(PURCHASE_INPUTS)] == ['a', 'b']
        assert sync_service.last_durable_sync['purchase_inputs'] is not None
        cached = fallback_cache.load_collection('coconutInputs', PurchaseInput.from_wire)
        assert [r.id for r in cached] == ['a', 'b']

    def test_unreachable_server_uses_cache(self, sync_service, remote, fallback_cache, make_purchase):
        fallback_cache.store_collection('coconutInputs', [make_purchase(id='cached')])
        remote.online = False

        source = sync_service.load(PURCHASE_INPUTS)

        assert source is LoadSource.CACHE
        assert [r.id for r in sync_service.records(PURCHASE_INPUTS)] == ['cached']
        assert sync_service.last_durable_sync['purchase_inputs'] is None

    def test_unreachable_server_and_empty_cache(self, sync_service, remote):
        remote.online = False

        assert sync_service.load(LABOUR_WAGES) is LoadSource.CACHE
        assert sync_service.records(LABOUR_WAGES) == []

    def test_kind_by_name(self, sync_service):
        assert sync_service.load('labour_wages') is LoadSource.SERVER

    def test_client_only_kind_is_rejected(self, sync_service):
        with pytest.raises(ValueError):
            sync_service.load(OUTPUTS)


# =============================================================================
# Write path
# =============================================================================

class TestCreate:

    def test_online_create_is_saved(self, sync_service, remote, make_purchase):
        record = make_purchase(id='new')

        outcome = sync_service.create(PURCHASE_INPUTS, record)

        assert outcome is SyncOutcome.SAVED
        assert outcome.durable
        assert remote.rows['purchase_inputs'] == [record]
        assert sync_service.last_durable_sync['purchase_inputs'] is not None

    def test_offline_create_is_saved_locally(self, sync_service, remote, fallback_cache, make_purchase):
        remote.online = False
        record = make_purchase(id='new')

        outcome = sync_service.create(PURCHASE_INPUTS, record)

        assert outcome is SyncOutcome.SAVED_LOCALLY
        assert not outcome.durable
        assert sync_service.records(PURCHASE_INPUTS) == [record]
        assert fallback_cache.load_collection('coconutInputs', PurchaseInput.from_wire) == [record]
        assert sync_service.last_durable_sync['purchase_inputs'] is None

    def test_new_records_go_first(self, sync_service, make_purchase):
        sync_service.create(PURCHASE_INPUTS, make_purchase(id='first'))
        sync_service.create(PURCHASE_INPUTS, make_purchase(id='second'))

        assert [r.id for r in sync_service.records(PURCHASE_INPUTS)] == ['second', 'first']

    def test_observers_see_state_before_the_server_call(self, sync_service, remote, make_purchase):
        observed = []
        sync_service.subscribe(lambda kind, records: observed.append([r.id for r in records]))
        at_request = []
        remote.before_call = lambda action, kind: at_request.append(list(observed))

        sync_service.create(PURCHASE_INPUTS, make_purchase(id='new'))

        assert at_request == [[['new']]]

    def test_unsubscribed_observer_is_not_called(self, sync_service, make_purchase):
        observed = []
        unsubscribe = sync_service.subscribe(lambda kind, records: observed.append(records))
        unsubscribe()

        sync_service.create(PURCHASE_INPUTS, make_purchase())

        assert observed == []


class TestUpdate:

    def test_update_replaces_record(self, sync_service, remote, make_purchase):
        sync_service.create(PURCHASE_INPUTS, make_purchase(id='a', count=10))
        revised = make_purchase(id='a', count=20)

        outcome = sync_service.update(PURCHASE_INPUTS, revised)

        assert outcome is SyncOutcome.SAVED
        assert sync_service.records(PURCHASE_INPUTS) == [revised]
        assert remote.rows['purchase_inputs'] == [revised]

    def test_update_unknown_id(self, sync_service, remote, make_purchase):
        sync_service.create(PURCHASE_INPUTS, make_purchase(id='a'))
        before = sync_service.records(PURCHASE_INPUTS)

        with pytest.raises(NotFoundError):
            sync_service.update(PURCHASE_INPUTS, make_purchase(id='zzz'))

        assert sync_service.records(PURCHASE_INPUTS) == before
        assert ('update', 'purchase_inputs') not in remote.calls

    def test_offline_update(self, sync_service, remote, make_purchase):
        sync_service.create(PURCHASE_INPUTS, make_purchase(id='a', count=10))
        remote.online = False

        outcome = sync_service.update(PURCHASE_INPUTS, make_purchase(id='a', count=11))

        assert outcome is SyncOutcome.SAVED_LOCALLY
        assert sync_service.records(PURCHASE_INPUTS)[0].count == 11


class TestDelete:

    def test_delete(self, sync_service, remote, make_purchase):
        sync_service.create(PURCHASE_INPUTS, make_purchase(id='a'))

        assert sync_service.delete(PURCHASE_INPUTS, 'a') is SyncOutcome.SAVED
        assert sync_service.records(PURCHASE_INPUTS) == []
        assert remote.rows['purchase_inputs'] == []

    def test_delete_unknown_id_leaves_set_unchanged(self, sync_service, make_purchase):
        sync_service.create(PURCHASE_INPUTS, make_purchase(id='a'))
        before = sync_service.records(PURCHASE_INPUTS)

        sync_service.delete(PURCHASE_INPUTS, 'missing')

        assert sync_service.records(PURCHASE_INPUTS) == before


# =============================================================================
# Sessions sharing a cache
# =============================================================================

class TestCacheNotifications:

    def test_other_service_adopts_writes(self, remote, fallback_cache, make_purchase):
        first = SyncService(remote, fallback_cache)
        second = SyncService(remote, fallback_cache)
        remote.online = False

        first.create(PURCHASE_INPUTS, make_purchase(id='shared'))

        assert [r.id for r in second.records(PURCHASE_INPUTS)] == ['shared']
        first.close()
        second.close()

    def test_closed_service_stops_listening(self, remote, fallback_cache, make_purchase):
        first = SyncService(remote, fallback_cache)
        second = SyncService(remote, fallback_cache)
        second.close()

        first.create(PURCHASE_INPUTS, make_purchase(id='shared'))

        assert second.records(PURCHASE_INPUTS) == []
        first.close()

    def test_malformed_notification_is_ignored(self, sync_service, fallback_cache, make_purchase):
        sync_service.create(PURCHASE_INPUTS, make_purchase(id='a'))

        fallback_cache.set('coconutInputs', '{broken')

        assert [r.id for r in sync_service.records(PURCHASE_INPUTS)] == ['a']
