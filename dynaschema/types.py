HASH = 'HASH'
RANGE = 'RANGE'
