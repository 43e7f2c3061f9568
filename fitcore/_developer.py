#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Developer field bookkeeping.

Developer fields arrive with only a byte count in their definition. Their
name, base type and units come from earlier ``field_description`` messages,
keyed by (developer data index, field definition number). Applications
announce themselves in ``developer_data_id`` messages.

"""
from collections import namedtuple
import logging


logger = logging.getLogger(__name__)

DeveloperFieldDescriptor = namedtuple(
    'DeveloperFieldDescriptor',
    'developer_data_index field_number name base_type_id units scale offset')

DeveloperDataId = namedtuple(
    'DeveloperDataId',
    'developer_data_index application_id developer_id manufacturer_id '
    'application_version')

# Field numbers within the two message kinds.
DESCRIPTION_FIELDS = {
    'developer_data_index': 0,
    'field_definition_number': 1,
    'fit_base_type_id': 2,
    'field_name': 3,
    'scale': 6,
    'offset': 7,
    'units': 8}

DATA_ID_FIELDS = {
    'developer_id': 0,
    'application_id': 1,
    'manufacturer_id': 2,
    'developer_data_index': 3,
    'application_version': 4}


def _valid_values(message, numbers):
    """{name: value} for the given field numbers, None where invalid."""
    values = {}
    for name, number in numbers.items():
        field = message.field(number)
        values[name] = field.value if field and field.is_valid else None
    return values


class DeveloperFieldCatalog:
    """Accumulates developer field descriptors for one decode.

    Entries are only ever added (a repeated description replaces the
    previous binding for the same key), never removed.
    """
    def __init__(self):
        self.descriptors = {}    # (index, field number) -> descriptor
        self.applications = {}   # index -> DeveloperDataId

    def __len__(self):
        return len(self.descriptors)

    def __contains__(self, key):
        return key in self.descriptors

    def __iter__(self):
        return iter(self.descriptors.values())

    def add(self, descriptor):
        key = (descriptor.developer_data_index, descriptor.field_number)
        self.descriptors[key] = descriptor
        logger.debug('developer field %d:%d is %r (base type 0x%02X)',
                     key[0], key[1], descriptor.name, descriptor.base_type_id)

    def learn_field_description(self, message):
        """Bind a developer field from a decoded field description message.

        Returns the new descriptor, or None if the message lacks a valid
        index, field number or base type.
        """
        values = _valid_values(message, DESCRIPTION_FIELDS)

        index = values['developer_data_index']
        number = values['field_definition_number']
        base_type_id = values['fit_base_type_id']

        if None in (index, number, base_type_id):
            logger.warning('ignoring incomplete field description '
                           '(index=%r, number=%r, base type=%r)',
                           index, number, base_type_id)
            return None

        descriptor = DeveloperFieldDescriptor(
            developer_data_index=index,
            field_number=number,
            name=values['field_name'],
            base_type_id=base_type_id,
            units=values['units'],
            scale=values['scale'],
            offset=values['offset'])
        self.add(descriptor)
        return descriptor

    def learn_developer_data_id(self, message):
        """Record which application owns a developer data index."""
        values = _valid_values(message, DATA_ID_FIELDS)

        index = values.pop('developer_data_index')
        if index is None:
            logger.warning('ignoring developer data id without an index')
            return None

        application = DeveloperDataId(developer_data_index=index, **values)
        self.applications[index] = application
        logger.debug('developer data index %d belongs to application %r',
                     index, application.application_id)
        return application

    def resolve(self, developer_data_index, field_number):
        return self.descriptors.get((developer_data_index, field_number))

    def application(self, developer_data_index):
        return self.applications.get(developer_data_index)
