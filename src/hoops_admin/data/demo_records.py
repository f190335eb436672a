"""
Raw demo records in the shapes the club backend returns.

Records are deliberately inconsistent (missing timestamps, unknown statuses,
incomplete registrations) so the normalizers get exercised in demo mode.
"""

DEMO_TICKETS = [
    {
        "_id": "tp-1001",
        "customerName": "Dana Whitfield",
        "customerEmail": "dana.whitfield@example.com",
        "packageName": "Family Pass",
        "quantity": 4,
        "unitPrice": 12.5,
        "amount": 50.0,
        "currency": "USD",
        "status": "completed",
        "squarePaymentId": "sq-pay-88121",
        "receiptUrl": "https://squareup.com/receipt/preview/sq-pay-88121",
        "formName": "Spring Classic 2025 Tickets",
        "purchasedAt": "2025-04-12T15:20:00Z",
    },
    {
        "_id": "tp-1002",
        "customerName": "Marcus Oyelaran",
        "customerEmail": "marcus.o@example.com",
        "quantity": 2,
        "unitPrice": 8,
        "status": "COMPLETED",
        "squarePaymentId": "sq-pay-88190",
        "tournamentName": "Summer Shootout",
        "processedAt": "2025-07-02T18:05:00Z",
    },
    {
        "_id": "tp-1003",
        "customerName": "Priya Raman",
        "customerEmail": "priya.raman@example.com",
        "packageName": "General Admission",
        "quantity": 1,
        "unitPrice": 10,
        "amount": 10,
        "status": "pending",
        "createdAt": "2025-10-03T09:41:00Z",
        "season": "Fall",
        "year": 2025,
    },
    {
        "_id": "tp-1004",
        "customerName": "Dana Whitfield",
        "customerEmail": "dana.whitfield@example.com",
        "packageName": "General Admission",
        "quantity": 3,
        "unitPrice": 10,
        "amount": 30,
        "status": "refunded",
        "formName": "Autumn Invitational Tickets",
        "purchasedAt": "2025-10-18T13:00:00Z",
    },
    {
        "_id": "tp-1005",
        "customerName": "Luis Ortega",
        "customerEmail": "luis.ortega@example.com",
        "packageName": "VIP Courtside",
        "quantity": 2,
        "unitPrice": 25,
        "amount": 50,
        "status": "captured",
        "squarePaymentId": "sq-pay-90112",
        "receiptUrl": "https://squareup.com/receipt/preview/sq-pay-90112",
        "purchasedAt": "2026-01-20T20:30:00Z",
    },
    {
        "_id": "tp-1006",
        "customerName": "Hannah Brooks",
        "customerEmail": "hbrooks@example.com",
        "packageName": "Family Pass",
        "quantity": 4,
        "unitPrice": 12.5,
        "amount": 50,
        "status": "failed",
        "formName": "Winter Jam 2026",
        "purchasedAt": "2026-02-07T11:15:00Z",
    },
    {
        "_id": "tp-1007",
        "customerName": "Marcus Oyelaran",
        "customerEmail": "marcus.o@example.com",
        "packageName": "General Admission",
        "quantity": 5,
        "unitPrice": 10,
        "amount": 50,
        "status": "completed",
        "squarePaymentId": "sq-pay-91450",
        "tournamentName": "Spring Classic 2026",
        "purchasedAt": "2026-04-25T16:45:00Z",
    },
]

DEMO_TEAMS = [
    {
        "_id": "team-01",
        "name": "Bothell Select 5th Boys",
        "year": 2025,
        "grade": "5",
        "gender": "Male",
        "status": "active",
        "coachIds": ["coach-1", "coach-2"],
        "playerIds": ["p-1", "p-2", "p-3", "p-4", "p-5", "p-6", "p-7", "p-8"],
        "tryoutSeason": "Basketball Select Tryout",
        "tryoutYear": 2025,
    },
    {
        "_id": "team-02",
        "name": "Bothell Select 6th Girls",
        "year": 2025,
        "grade": "6",
        "gender": "Female",
        "coachIds": ["coach-3"],
        "playerIds": ["p-9", "p-10", "p-11", "p-12", "p-13", "p-14", "p-15"],
        "tryoutSeason": "Basketball Select Tryout",
        "tryoutYear": 2025,
    },
    {
        "_id": "team-03",
        "name": "Bothell Select 8th Boys",
        "year": 2024,
        "grade": "8",
        "gender": "Male",
        "status": "inactive",
        "coachIds": ["coach-4"],
        "playerIds": ["p-16", "p-17", "p-18", "p-19", "p-20", "p-21"],
        "tryoutSeason": "Basketball Select Tryout",
        "tryoutYear": 2024,
    },
    {
        "_id": "team-04",
        "name": "Bothell Select 4th Girls",
        "year": 2026,
        "grade": "4",
        "gender": "Female",
        "status": "active",
        "coachIds": ["coach-5", "coach-6"],
        "playerIds": ["p-22", "p-23", "p-24", "p-25", "p-26", "p-27", "p-28", "p-29", "p-30"],
        "tryoutSeason": "Basketball Select Tryout",
        "tryoutYear": 2026,
    },
]

DEMO_PAYMENTS = [
    {
        "_id": "pay-5001",
        "amount": 450,
        "cardLastFour": "4242",
        "cardBrand": "VISA",
        "buyerEmail": "kim.nguyen@example.com",
        "receiptUrl": "https://squareup.com/receipt/preview/pay-5001",
        "parent": [{"_id": "parent-1", "fullName": "Kim Nguyen", "email": "kim.nguyen@example.com"}],
        "refunds": [
            {
                "_id": "rf-1",
                "amount": 150,
                "reason": "Player moved out of state",
                "status": "pending",
                "requestedAt": "2026-09-28T17:00:00Z",
            },
        ],
    },
    {
        "_id": "pay-5002",
        "amount": 300,
        "cardLastFour": "1881",
        "cardBrand": "MASTERCARD",
        "buyerEmail": "j.alvarez@example.com",
        "parent": [],
        "refunds": [
            {
                "_id": "rf-2",
                "amount": 300,
                "reason": "Duplicate charge",
                "status": "completed",
                "source": "square",
                "requestedAt": "2026-08-02T10:00:00Z",
                "processedAt": "2026-08-03T09:30:00Z",
            },
            {
                "_id": "rf-3",
                "amount": 25,
                "reason": "Uniform not delivered",
                "status": "failed",
                "notes": "Card expired",
                "requestedAt": "2026-08-10T12:00:00Z",
                "processedAt": "2026-08-10T12:05:00Z",
            },
        ],
    },
    {
        "_id": "pay-5003",
        "amount": 120,
        "cardLastFour": "0005",
        "cardBrand": "AMERICAN_EXPRESS",
        "parent": [{"_id": "parent-3", "fullName": "Tom Becker", "email": "tbecker@example.com"}],
        "refunds": [
            {
                "_id": "rf-4",
                "amount": 60,
                "reason": "Camp cancelled",
                "status": "pending",
                "requestedAt": "2026-10-01T08:15:00Z",
            },
        ],
    },
    {
        "_id": "pay-5004",
        "amount": 80,
        "cardLastFour": "7777",
        "cardBrand": "DISCOVER",
        "parent": [{"_id": "parent-4", "fullName": "Ana Silva", "email": "ana.silva@example.com"}],
        "refunds": [],
    },
]

DEMO_TOURNAMENTS = [
    {"_id": "tour-1", "name": "Fall Classic", "year": 2026},
    {"_id": "tour-2", "name": "Winter Jam", "year": 2026},
]

DEMO_REGISTRATIONS = {
    ("Fall Classic", 2026): [
        {
            "_id": "reg-1",
            "team": {
                "_id": "t-101",
                "name": "Eastside Hawks",
                "grade": "7",
                "sex": "Male",
                "levelOfCompetition": "Gold",
            },
            "parent": {"_id": "parent-10", "fullName": "Grace Kim", "email": "grace.kim@example.com"},
            "paymentComplete": True,
            "registrationDate": "2026-09-01T12:00:00Z",
        },
        {
            "_id": "reg-2",
            "team": {
                "_id": "t-102",
                "name": "Lakeside Lightning",
                "grade": "6",
                "sex": "Female",
                "levelOfCompetition": "Silver",
            },
            "parent": {"_id": "parent-11", "fullName": "Omar Haddad", "email": "omar.h@example.com"},
            "paymentStatus": "pending",
            "registrationDate": "2026-09-05T08:30:00Z",
        },
        {
            "_id": "reg-3",
            "team": {
                "_id": "t-103",
                "name": "North Creek Blaze",
                "grade": "7",
                "sex": "Male",
                "levelOfCompetition": "Bronze",
            },
            "parent": {"_id": "parent-10", "fullName": "Grace Kim", "email": "grace.kim@example.com"},
            "paymentStatus": "paid",
            "registrationDate": "2026-09-07T19:10:00Z",
        },
        {
            "_id": "reg-4",
            "team": {"_id": "t-104", "grade": "5", "sex": "Female"},
            "parent": {"_id": "parent-12", "fullName": "Lena Park"},
            "registrationDate": "2026-09-09T14:00:00Z",
        },
    ],
    ("Winter Jam", 2026): [],
}
