# Common US-market EVs with trip-planning specs (US units)
EV_MODELS = {
    'tesla_model_3': {
        'manufacturer': 'Tesla',
        'model_name': 'Model 3 Long Range',
        'battery_capacity_kwh': 82,       # usable kWh
        'efficiency_kwh_per_mile': 0.229,
        'range_miles': 358,               # EPA rated
        'max_charging_speed_kw': 250,
    },
    'tesla_model_y': {
        'manufacturer': 'Tesla',
        'model_name': 'Model Y Long Range',
        'battery_capacity_kwh': 81,
        'efficiency_kwh_per_mile': 0.26,
        'range_miles': 310,
        'max_charging_speed_kw': 250,
    },
    'nissan_leaf': {
        'manufacturer': 'Nissan',
        'model_name': 'Leaf SV Plus',
        'battery_capacity_kwh': 62,
        'efficiency_kwh_per_mile': 0.29,
        'range_miles': 212,
        'max_charging_speed_kw': 100,
    },
    'chevy_bolt': {
        'manufacturer': 'Chevrolet',
        'model_name': 'Bolt EV',
        'battery_capacity_kwh': 65,
        'efficiency_kwh_per_mile': 0.25,
        'range_miles': 259,
        'max_charging_speed_kw': 55,
    },
    'ford_mustang_mach_e': {
        'manufacturer': 'Ford',
        'model_name': 'Mustang Mach-E Extended Range',
        'battery_capacity_kwh': 91,
        'efficiency_kwh_per_mile': 0.31,
        'range_miles': 290,
        'max_charging_speed_kw': 150,
    },
    'hyundai_ioniq_5': {
        'manufacturer': 'Hyundai',
        'model_name': 'Ioniq 5 Long Range',
        'battery_capacity_kwh': 77.4,
        'efficiency_kwh_per_mile': 0.28,
        'range_miles': 303,
        'max_charging_speed_kw': 235,
    },
    'kia_ev6': {
        'manufacturer': 'Kia',
        'model_name': 'EV6 Long Range',
        'battery_capacity_kwh': 77.4,
        'efficiency_kwh_per_mile': 0.27,
        'range_miles': 310,
        'max_charging_speed_kw': 235,
    },
    'volkswagen_id4': {
        'manufacturer': 'Volkswagen',
        'model_name': 'ID.4 Pro',
        'battery_capacity_kwh': 77,
        'efficiency_kwh_per_mile': 0.30,
        'range_miles': 275,
        'max_charging_speed_kw': 135,
    },
    'rivian_r1t': {
        'manufacturer': 'Rivian',
        'model_name': 'R1T Large Pack',
        'battery_capacity_kwh': 135,
        'efficiency_kwh_per_mile': 0.43,
        'range_miles': 314,
        'max_charging_speed_kw': 220,
    },
}

DEFAULT_EV_MODEL = 'tesla_model_3'
