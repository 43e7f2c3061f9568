#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
A slice of the FIT global profile (see "Profile.xlsx" in the FIT SDK).

Only the common activity message kinds are described. Anything else still
decodes, it just comes out without names, scales or units. Swap in a fuller
profile by passing any object with `lookup` and `message_name` methods to the
decoder.

"""
from collections import namedtuple


FIELD_DESCRIPTION = 206
DEVELOPER_DATA_ID = 207

TIMESTAMP_FIELD = 253

FieldInfo = namedtuple('FieldInfo', 'name scale offset units type_name')


GLOBAL_MESG_NUMS = {
    0: 'file_id',
    1: 'capabilities',
    2: 'device_settings',
    3: 'user_profile',
    4: 'hrm_profile',
    5: 'sdm_profile',
    6: 'bike_profile',
    7: 'zones_target',
    18: 'session',
    19: 'lap',
    20: 'record',
    21: 'event',
    23: 'device_info',
    26: 'workout',
    27: 'workout_step',
    28: 'schedule',
    34: 'activity',
    49: 'file_creator',
    206: 'field_description',
    207: 'developer_data_id'}

# Fields every message may carry.
COMMON_FIELDS = {
    250: {'field_name': 'part_index', 'field_type': 'uint32'},
    253: {'field_name': 'timestamp', 'field_type': 'date_time', 'units': 's'},
    254: {'field_name': 'message_index', 'field_type': 'message_index'}}

MESSAGE_TYPES = {
    'file_id': {
        0: {'field_name': 'type', 'field_type': 'file'},
        1: {'field_name': 'manufacturer', 'field_type': 'manufacturer'},
        2: {'field_name': 'product', 'field_type': 'uint16'},
        3: {'field_name': 'serial_number', 'field_type': 'uint32z'},
        4: {'field_name': 'time_created', 'field_type': 'date_time'},
        5: {'field_name': 'number', 'field_type': 'uint16'},
        8: {'field_name': 'product_name', 'field_type': 'string'}},
    'file_creator': {
        0: {'field_name': 'software_version', 'field_type': 'uint16'},
        1: {'field_name': 'hardware_version', 'field_type': 'uint8'}},
    'event': {
        0: {'field_name': 'event', 'field_type': 'event'},
        1: {'field_name': 'event_type', 'field_type': 'event_type'},
        3: {'field_name': 'data', 'field_type': 'uint32'},
        4: {'field_name': 'event_group', 'field_type': 'uint8'}},
    'device_info': {
        0: {'field_name': 'device_index', 'field_type': 'device_index'},
        1: {'field_name': 'device_type', 'field_type': 'uint8'},
        2: {'field_name': 'manufacturer', 'field_type': 'manufacturer'},
        3: {'field_name': 'serial_number', 'field_type': 'uint32z'},
        4: {'field_name': 'product', 'field_type': 'uint16'},
        5: {'field_name': 'software_version', 'field_type': 'uint16',
            'scale': 100},
        6: {'field_name': 'hardware_version', 'field_type': 'uint8'},
        7: {'field_name': 'cum_operating_time', 'field_type': 'uint32',
            'units': 's'},
        10: {'field_name': 'battery_voltage', 'field_type': 'uint16',
             'scale': 256, 'units': 'V'},
        11: {'field_name': 'battery_status', 'field_type': 'battery_status'},
        27: {'field_name': 'product_name', 'field_type': 'string'}},
    'record': {
        0: {'field_name': 'position_lat', 'field_type': 'sint32',
            'units': 'semicircles'},
        1: {'field_name': 'position_long', 'field_type': 'sint32',
            'units': 'semicircles'},
        2: {'field_name': 'altitude', 'field_type': 'uint16',
            'scale': 5, 'offset': 500, 'units': 'm'},
        3: {'field_name': 'heart_rate', 'field_type': 'uint8',
            'units': 'bpm'},
        4: {'field_name': 'cadence', 'field_type': 'uint8', 'units': 'rpm'},
        5: {'field_name': 'distance', 'field_type': 'uint32',
            'scale': 100, 'units': 'm'},
        6: {'field_name': 'speed', 'field_type': 'uint16',
            'scale': 1000, 'units': 'm/s'},
        7: {'field_name': 'power', 'field_type': 'uint16', 'units': 'watts'},
        13: {'field_name': 'temperature', 'field_type': 'sint8',
             'units': 'C'},
        53: {'field_name': 'fractional_cadence', 'field_type': 'uint8',
             'scale': 128, 'units': 'rpm'},
        73: {'field_name': 'enhanced_speed', 'field_type': 'uint32',
             'scale': 1000, 'units': 'm/s'},
        78: {'field_name': 'enhanced_altitude', 'field_type': 'uint32',
             'scale': 5, 'offset': 500, 'units': 'm'}},
    'lap': {
        0: {'field_name': 'event', 'field_type': 'event'},
        1: {'field_name': 'event_type', 'field_type': 'event_type'},
        2: {'field_name': 'start_time', 'field_type': 'date_time'},
        3: {'field_name': 'start_position_lat', 'field_type': 'sint32',
            'units': 'semicircles'},
        4: {'field_name': 'start_position_long', 'field_type': 'sint32',
            'units': 'semicircles'},
        5: {'field_name': 'end_position_lat', 'field_type': 'sint32',
            'units': 'semicircles'},
        6: {'field_name': 'end_position_long', 'field_type': 'sint32',
            'units': 'semicircles'},
        7: {'field_name': 'total_elapsed_time', 'field_type': 'uint32',
            'scale': 1000, 'units': 's'},
        8: {'field_name': 'total_timer_time', 'field_type': 'uint32',
            'scale': 1000, 'units': 's'},
        9: {'field_name': 'total_distance', 'field_type': 'uint32',
            'scale': 100, 'units': 'm'},
        11: {'field_name': 'total_calories', 'field_type': 'uint16',
             'units': 'kcal'},
        13: {'field_name': 'avg_speed', 'field_type': 'uint16',
             'scale': 1000, 'units': 'm/s'},
        14: {'field_name': 'max_speed', 'field_type': 'uint16',
             'scale': 1000, 'units': 'm/s'},
        15: {'field_name': 'avg_heart_rate', 'field_type': 'uint8',
             'units': 'bpm'},
        16: {'field_name': 'max_heart_rate', 'field_type': 'uint8',
             'units': 'bpm'},
        17: {'field_name': 'avg_cadence', 'field_type': 'uint8',
             'units': 'rpm'},
        18: {'field_name': 'max_cadence', 'field_type': 'uint8',
             'units': 'rpm'},
        19: {'field_name': 'avg_power', 'field_type': 'uint16',
             'units': 'watts'},
        20: {'field_name': 'max_power', 'field_type': 'uint16',
             'units': 'watts'},
        24: {'field_name': 'lap_trigger', 'field_type': 'lap_trigger'},
        25: {'field_name': 'sport', 'field_type': 'sport'}},
    'session': {
        0: {'field_name': 'event', 'field_type': 'event'},
        1: {'field_name': 'event_type', 'field_type': 'event_type'},
        2: {'field_name': 'start_time', 'field_type': 'date_time'},
        5: {'field_name': 'sport', 'field_type': 'sport'},
        6: {'field_name': 'sub_sport', 'field_type': 'sub_sport'},
        7: {'field_name': 'total_elapsed_time', 'field_type': 'uint32',
            'scale': 1000, 'units': 's'},
        8: {'field_name': 'total_timer_time', 'field_type': 'uint32',
            'scale': 1000, 'units': 's'},
        9: {'field_name': 'total_distance', 'field_type': 'uint32',
            'scale': 100, 'units': 'm'},
        11: {'field_name': 'total_calories', 'field_type': 'uint16',
             'units': 'kcal'},
        14: {'field_name': 'avg_speed', 'field_type': 'uint16',
             'scale': 1000, 'units': 'm/s'},
        15: {'field_name': 'max_speed', 'field_type': 'uint16',
             'scale': 1000, 'units': 'm/s'},
        16: {'field_name': 'avg_heart_rate', 'field_type': 'uint8',
             'units': 'bpm'},
        17: {'field_name': 'max_heart_rate', 'field_type': 'uint8',
             'units': 'bpm'},
        18: {'field_name': 'avg_cadence', 'field_type': 'uint8',
             'units': 'rpm'},
        20: {'field_name': 'avg_power', 'field_type': 'uint16',
             'units': 'watts'},
        21: {'field_name': 'max_power', 'field_type': 'uint16',
             'units': 'watts'},
        22: {'field_name': 'total_ascent', 'field_type': 'uint16',
             'units': 'm'},
        23: {'field_name': 'total_descent', 'field_type': 'uint16',
             'units': 'm'},
        25: {'field_name': 'first_lap_index', 'field_type': 'uint16'},
        26: {'field_name': 'num_laps', 'field_type': 'uint16'}},
    'activity': {
        0: {'field_name': 'total_timer_time', 'field_type': 'uint32',
            'scale': 1000, 'units': 's'},
        1: {'field_name': 'num_sessions', 'field_type': 'uint16'},
        2: {'field_name': 'type', 'field_type': 'activity'},
        3: {'field_name': 'event', 'field_type': 'event'},
        4: {'field_name': 'event_type', 'field_type': 'event_type'},
        5: {'field_name': 'local_timestamp', 'field_type': 'local_date_time'}},
    'developer_data_id': {
        0: {'field_name': 'developer_id', 'field_type': 'byte'},
        1: {'field_name': 'application_id', 'field_type': 'byte'},
        2: {'field_name': 'manufacturer_id', 'field_type': 'manufacturer'},
        3: {'field_name': 'developer_data_index', 'field_type': 'uint8'},
        4: {'field_name': 'application_version', 'field_type': 'uint32'}},
    'field_description': {
        0: {'field_name': 'developer_data_index', 'field_type': 'uint8'},
        1: {'field_name': 'field_definition_number', 'field_type': 'uint8'},
        2: {'field_name': 'fit_base_type_id', 'field_type': 'fit_base_type'},
        3: {'field_name': 'field_name', 'field_type': 'string'},
        4: {'field_name': 'array', 'field_type': 'uint8'},
        5: {'field_name': 'components', 'field_type': 'string'},
        6: {'field_name': 'scale', 'field_type': 'uint8'},
        7: {'field_name': 'offset', 'field_type': 'sint8'},
        8: {'field_name': 'units', 'field_type': 'string'},
        9: {'field_name': 'bits', 'field_type': 'string'},
        10: {'field_name': 'accumulate', 'field_type': 'string'},
        13: {'field_name': 'fit_base_unit_id', 'field_type': 'fit_base_unit'},
        14: {'field_name': 'native_mesg_num', 'field_type': 'mesg_num'},
        15: {'field_name': 'native_field_num', 'field_type': 'uint8'}}}

TYPES_INFO = {
    'file': {1: 'device', 2: 'settings', 3: 'sport', 4: 'activity',
             5: 'workout', 6: 'course', 7: 'schedules', 9: 'weight',
             10: 'totals', 11: 'goals', 14: 'blood_pressure',
             15: 'monitoring_a', 20: 'activity_summary'},
    'manufacturer': {1: 'garmin', 13: 'dynastream_oem', 15: 'dynastream',
                     23: 'suunto', 32: 'wahoo_fitness', 69: 'stages_cycling',
                     255: 'development', 263: 'favero_electronics',
                     294: 'coros', 310: 'zwift'},
    'event': {0: 'timer', 3: 'workout', 8: 'session', 9: 'lap',
              10: 'course_point', 11: 'battery', 26: 'activity',
              42: 'front_gear_change', 43: 'rear_gear_change'},
    'event_type': {0: 'start', 1: 'stop', 2: 'consecutive_depreciated',
                   3: 'marker', 4: 'stop_all', 5: 'begin_depreciated',
                   6: 'end_depreciated', 7: 'end_all_depreciated',
                   8: 'stop_disable', 9: 'stop_disable_all'},
    'sport': {0: 'generic', 1: 'running', 2: 'cycling', 3: 'transition',
              4: 'fitness_equipment', 5: 'swimming', 10: 'training',
              11: 'walking', 17: 'hiking', 18: 'multisport', 254: 'all'},
    'sub_sport': {0: 'generic', 1: 'treadmill', 2: 'street', 3: 'trail',
                  4: 'track', 5: 'spin', 6: 'indoor_cycling', 7: 'road',
                  8: 'mountain', 17: 'lap_swimming', 18: 'open_water'},
    'lap_trigger': {0: 'manual', 1: 'time', 2: 'distance',
                    3: 'position_start', 4: 'position_lap',
                    5: 'position_waypoint', 6: 'position_marked',
                    7: 'session_end', 8: 'fitness_equipment'},
    'activity': {0: 'manual', 1: 'auto_multi_sport'},
    'battery_status': {1: 'new', 2: 'good', 3: 'ok', 4: 'low',
                       5: 'critical', 6: 'charging', 7: 'unknown'}}


class Profile:
    """Read-only queries over the profile tables.

    Parameters
    ----------
    message_types : dict
        ``{message_name: {field_number: field_data}}``
    mesg_nums : dict
        ``{global_message_number: message_name}``
    types_info : dict
        ``{type_name: {value: value_name}}``
    """
    def __init__(self, message_types=MESSAGE_TYPES, mesg_nums=GLOBAL_MESG_NUMS,
                 types_info=TYPES_INFO):
        self.message_types = message_types
        self.mesg_nums = mesg_nums
        self.mesg_nums_by_name = {v: k for k, v in mesg_nums.items()}
        self.types_info = types_info

    def message_name(self, global_id):
        return self.mesg_nums.get(global_id)

    def message_number(self, name):
        return self.mesg_nums_by_name.get(name)

    def lookup(self, global_id, field_number):
        """Field metadata for (global message number, field number).

        Returns None when either number is unknown.
        """
        message_type = self.message_types.get(self.message_name(global_id), {})
        data = message_type.get(field_number, COMMON_FIELDS.get(field_number))
        if data is None:
            return None

        return FieldInfo(name=data['field_name'],
                         scale=data.get('scale', 1),
                         offset=data.get('offset', 0),
                         units=data.get('units', ''),
                         type_name=data.get('field_type'))

    def value_name(self, type_name, value):
        """Like the FitCSVTool, swap enumerated codes for their names."""
        return self.types_info.get(type_name, {}).get(value, value)


PROFILE = Profile()
