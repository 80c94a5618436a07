"""Built-in demo ledger."""

SAMPLE_CSV_DATA = """date,category,amount
2024-01-01,Income,4200
2024-01-02,Rent,1400
2024-01-05,Groceries,310.45
2024-01-09,Utilities,180.20
2024-01-14,Dining,95.60
2024-01-21,Transport,120
2024-01-27,Entertainment,60
2024-02-01,Income,4200
2024-02-02,Rent,1400
2024-02-06,Groceries,295.10
2024-02-10,Utilities,210.75
2024-02-15,Dining,140.30
2024-02-20,Transport,115
2024-02-25,Entertainment,45
2024-03-01,Income,4350
2024-03-02,Rent,1400
2024-03-04,Groceries,342.80
2024-03-09,Utilities,165.40
2024-03-13,Dining,210.90
2024-03-18,Transport,130
2024-03-22,Shopping,260
2024-03-29,Entertainment,80
2024-04-01,Income,4350
2024-04-02,Rent,1400
2024-04-05,Groceries,318.25
2024-04-08,Utilities,150.10
2024-04-12,Dining,185.00
2024-04-19,Transport,98
2024-04-23,Shopping,420
2024-04-26,Health,75
"""
