from rest_framework import viewsets, status
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema, extend_schema_view

from .serializers import (
    CoconutInputSerializer,
    CoconutInputCreateSerializer,
    CoconutInputUpdateSerializer,
    LabourWageSerializer,
    LabourWageCreateSerializer,
    LabourWageUpdateSerializer,
    ClientSerializer,
    ClientCreateSerializer,
    SuccessSerializer,
)
from .services import get_record_store


class RecordViewSet(viewsets.ViewSet):
    """
    Base ViewSet for one Record Store table.

    list: Get all records of the kind
    create: Insert a record (caller-generated id)
    destroy: Delete a record (idempotent)

    Subclasses bind the store operations and serializers.
    """

    # Caller-generated ids may contain dots
    lookup_value_regex = '[^/]+'

    output_serializer_class = None
    create_serializer_class = None

    def list_records(self, store):
        raise NotImplementedError

    def create_record(self, store, data):
        raise NotImplementedError

    def delete_record(self, store, record_id):
        raise NotImplementedError

    def list(self, request):
        records = self.list_records(get_record_store())
        serializer = self.output_serializer_class(records, many=True)
        return Response(serializer.data)

    def create(self, request):
        serializer = self.create_serializer_class(data=request.data)
        serializer.is_valid(raise_exception=True)
        self.create_record(get_record_store(), serializer.validated_data)
        return Response({'success': True}, status=status.HTTP_201_CREATED)

    def destroy(self, request, pk=None):
        self.delete_record(get_record_store(), pk)
        return Response({'success': True})


class UpdatableRecordViewSet(RecordViewSet):
    """Record ViewSet that also supports full-field PUT updates."""

    update_serializer_class = None

    def update_record(self, store, record_id, data):
        raise NotImplementedError

    def update(self, request, pk=None):
        serializer = self.update_serializer_class(data=request.data)
        serializer.is_valid(raise_exception=True)
        self.update_record(get_record_store(), pk, serializer.validated_data)
        return Response({'success': True})


@extend_schema_view(
    list=extend_schema(responses=CoconutInputSerializer(many=True), tags=['coconut']),
    create=extend_schema(request=CoconutInputCreateSerializer, responses={201: SuccessSerializer}, tags=['coconut']),
    update=extend_schema(request=CoconutInputUpdateSerializer, responses=SuccessSerializer, tags=['coconut']),
    destroy=extend_schema(responses=SuccessSerializer, tags=['coconut']),
)
class CoconutInputViewSet(UpdatableRecordViewSet):
    """Purchase inputs: /api/coconut[/{id}]"""

    output_serializer_class = CoconutInputSerializer
    create_serializer_class = CoconutInputCreateSerializer
    update_serializer_class = CoconutInputUpdateSerializer

    def list_records(self, store):
        return store.list_purchase_inputs()

    def create_record(self, store, data):
        store.create_purchase_input(**data)

    def update_record(self, store, record_id, data):
        store.update_purchase_input(record_id, **data)

    def delete_record(self, store, record_id):
        store.delete_purchase_input(record_id)


@extend_schema_view(
    list=extend_schema(responses=LabourWageSerializer(many=True), tags=['labour']),
    create=extend_schema(request=LabourWageCreateSerializer, responses={201: SuccessSerializer}, tags=['labour']),
    update=extend_schema(request=LabourWageUpdateSerializer, responses=SuccessSerializer, tags=['labour']),
    destroy=extend_schema(responses=SuccessSerializer, tags=['labour']),
)
class LabourWageViewSet(UpdatableRecordViewSet):
    """Labour wages: /api/labour[/{id}]"""

    output_serializer_class = LabourWageSerializer
    create_serializer_class = LabourWageCreateSerializer
    update_serializer_class = LabourWageUpdateSerializer

    def list_records(self, store):
        return store.list_labour_wages()

    def create_record(self, store, data):
        store.create_labour_wage(**data)

    def update_record(self, store, record_id, data):
        store.update_labour_wage(record_id, **data)

    def delete_record(self, store, record_id):
        store.delete_labour_wage(record_id)


@extend_schema_view(
    list=extend_schema(responses=ClientSerializer(many=True), tags=['clients']),
    create=extend_schema(request=ClientCreateSerializer, responses={201: SuccessSerializer}, tags=['clients']),
    destroy=extend_schema(responses=SuccessSerializer, tags=['clients']),
)
class ClientViewSet(RecordViewSet):
    """Clients: /api/clients[/{id}] (no update)"""

    output_serializer_class = ClientSerializer
    create_serializer_class = ClientCreateSerializer

    def list_records(self, store):
        return store.list_clients()

    def create_record(self, store, data):
        store.create_client(**data)

    def delete_record(self, store, record_id):
        store.delete_client(record_id)
