"""Foods missing from TACO, per 100 g, from USDA reference values."""

EXTRA_FOODS: list[dict[str, object]] = [
    {
        "id": 90001,
        "description": "Chia, semente",
        "category": "Sementes",
        "values": {
            "energy": 486, "protein": 16.5, "lipid": 30.7, "carbohydrate": 42.1,
            "fiber": 34.4, "calcium": 631, "iron": 7.7, "sodium": 16,
            "potassium": 407, "magnesium": 335, "phosphorus": 860, "zinc": 4.6,
            "copper": 0.9, "manganese": 2.7, "vitamin_c": 1.6, "vitamin_a": 54,
            "retinol": 0, "thiamine": 0.6, "riboflavin": 0.2, "pyridoxine": 0.1,
            "niacin": 8.8, "cholesterol": 0, "saturated": 3.3,
            "monounsaturated": 2.3, "polyunsaturated": 23.7,
        },
    },
    {
        "id": 90002,
        "description": "Quinoa, grão cozido",
        "category": "Cereais",
        "values": {
            "energy": 120, "protein": 4.4, "lipid": 1.9, "carbohydrate": 21.3,
            "fiber": 2.8, "calcium": 17, "iron": 1.5, "sodium": 7,
            "potassium": 172, "magnesium": 64, "phosphorus": 152, "zinc": 1.1,
            "copper": 0.2, "manganese": 0.6, "vitamin_c": 0, "vitamin_a": 1,
            "retinol": 0, "thiamine": 0.1, "riboflavin": 0.1, "pyridoxine": 0.1,
            "niacin": 0.4, "cholesterol": 0, "saturated": 0.2,
            "monounsaturated": 0.5, "polyunsaturated": 1.1,
        },
    },
    {
        "id": 90003,
        "description": "Quinoa, grão cru",
        "category": "Cereais",
        "values": {
            "energy": 368, "protein": 14.1, "lipid": 6.1, "carbohydrate": 64.2,
            "fiber": 7.0, "calcium": 47, "iron": 4.6, "sodium": 5,
            "potassium": 563, "magnesium": 197, "phosphorus": 457, "zinc": 3.1,
            "copper": 0.6, "manganese": 2.0, "vitamin_c": 0, "vitamin_a": 1,
            "retinol": 0, "thiamine": 0.4, "riboflavin": 0.3, "pyridoxine": 0.5,
            "niacin": 1.5, "cholesterol": 0, "saturated": 0.7,
            "monounsaturated": 1.6, "polyunsaturated": 3.3,
        },
    },
    {
        "id": 90004,
        "description": "Aveia, flocos integrais",
        "category": "Cereais",
        "values": {
            "energy": 389, "protein": 16.9, "lipid": 6.9, "carbohydrate": 66.3,
            "fiber": 10.6, "calcium": 54, "iron": 4.7, "sodium": 2,
            "potassium": 429, "magnesium": 177, "phosphorus": 523, "zinc": 4.0,
            "copper": 0.6, "manganese": 4.9, "vitamin_c": 0, "vitamin_a": 0,
            "retinol": 0, "thiamine": 0.8, "riboflavin": 0.1, "pyridoxine": 0.1,
            "niacin": 1.0, "cholesterol": 0, "saturated": 1.2,
            "monounsaturated": 2.2, "polyunsaturated": 2.5,
        },
    },
    {
        "id": 90005,
        "description": "Amaranto, grão",
        "category": "Cereais",
        "values": {
            "energy": 371, "protein": 13.6, "lipid": 7.0, "carbohydrate": 65.3,
            "fiber": 6.7, "calcium": 159, "iron": 7.6, "sodium": 4,
            "potassium": 508, "magnesium": 248, "phosphorus": 557, "zinc": 2.9,
            "copper": 0.5, "manganese": 3.3, "vitamin_c": 4.2, "vitamin_a": 2,
            "retinol": 0, "thiamine": 0.1, "riboflavin": 0.2, "pyridoxine": 0.6,
            "niacin": 0.9, "cholesterol": 0, "saturated": 1.5,
            "monounsaturated": 1.7, "polyunsaturated": 2.8,
        },
    },
    {
        "id": 90006,
        "description": "Gergelim, semente",
        "category": "Sementes",
        "values": {
            "energy": 573, "protein": 17.7, "lipid": 49.7, "carbohydrate": 23.5,
            "fiber": 11.8, "calcium": 975, "iron": 14.6, "sodium": 11,
            "potassium": 468, "magnesium": 351, "phosphorus": 629, "zinc": 7.8,
            "copper": 4.1, "manganese": 2.5, "vitamin_c": 0, "vitamin_a": 9,
            "retinol": 0, "thiamine": 0.8, "riboflavin": 0.2, "pyridoxine": 0.8,
            "niacin": 4.5, "cholesterol": 0, "saturated": 7.0,
            "monounsaturated": 18.8, "polyunsaturated": 21.8,
        },
    },
    {
        "id": 90007,
        "description": "Girassol, semente sem casca",
        "category": "Sementes",
        "values": {
            "energy": 584, "protein": 20.8, "lipid": 51.5, "carbohydrate": 20.0,
            "fiber": 8.6, "calcium": 78, "iron": 5.3, "sodium": 9,
            "potassium": 645, "magnesium": 325, "phosphorus": 660, "zinc": 5.0,
            "copper": 1.8, "manganese": 1.9, "vitamin_c": 1.4, "vitamin_a": 3,
            "retinol": 0, "thiamine": 1.5, "riboflavin": 0.4, "pyridoxine": 1.3,
            "niacin": 8.3, "cholesterol": 0, "saturated": 4.5,
            "monounsaturated": 18.5, "polyunsaturated": 23.1,
        },
    },
    {
        "id": 90008,
        "description": "Abóbora, semente",
        "category": "Sementes",
        "values": {
            "energy": 559, "protein": 30.2, "lipid": 49.1, "carbohydrate": 10.7,
            "fiber": 6.0, "calcium": 46, "iron": 8.8, "sodium": 7,
            "potassium": 809, "magnesium": 592, "phosphorus": 1233, "zinc": 7.8,
            "copper": 1.3, "manganese": 4.5, "vitamin_c": 1.9, "vitamin_a": 16,
            "retinol": 0, "thiamine": 0.3, "riboflavin": 0.2, "pyridoxine": 0.1,
            "niacin": 4.9, "cholesterol": 0, "saturated": 8.7,
            "monounsaturated": 16.2, "polyunsaturated": 21.0,
        },
    },
    {
        "id": 90009,
        "description": "Granola, tradicional",
        "category": "Cereais",
        "values": {
            "energy": 421, "protein": 10.4, "lipid": 12.5, "carbohydrate": 68.0,
            "fiber": 6.8, "calcium": 39, "iron": 3.6, "sodium": 26,
            "potassium": 318, "magnesium": 107, "phosphorus": 308, "zinc": 2.7,
            "copper": 0.4, "manganese": 2.4, "vitamin_c": 0.5, "vitamin_a": 1,
            "retinol": 0, "thiamine": 0.4, "riboflavin": 0.2, "pyridoxine": 0.2,
            "niacin": 1.2, "cholesterol": 0, "saturated": 2.1,
            "monounsaturated": 5.3, "polyunsaturated": 3.8,
        },
    },
    {
        "id": 90010,
        "description": "Açaí, polpa congelada",
        "category": "Frutas",
        "values": {
            "energy": 58, "protein": 0.8, "lipid": 3.9, "carbohydrate": 6.2,
            "fiber": 2.6, "calcium": 35, "iron": 1.5, "sodium": 0,
            "potassium": 124, "magnesium": 17, "phosphorus": 16, "zinc": 0.3,
            "copper": 0.2, "manganese": 2.2, "vitamin_c": 9.6, "vitamin_a": 74,
            "retinol": 0, "thiamine": 0.1, "riboflavin": 0.1, "pyridoxine": 0.1,
            "niacin": 0.4, "cholesterol": 0, "saturated": 1.0,
            "monounsaturated": 2.1, "polyunsaturated": 0.6,
        },
    },
]
