import pytest


FILLERS = {
    # tag: (fixed, variable)
    b'1200': (194, 28),
    b'1201': (167, 1),
    b'1202': (231, 71),
    b'1204': (252, 86),
    b'1209': (198, 32),
}


class CarrierBuilder(object):
    '''Builds the records of a synthetic carrier file byte by byte.'''

    def __init__(self, fixed=False):
        self.fixed = fixed

    def filler(self, tag):
        return b' ' * FILLERS[tag][0 if self.fixed else 1]

    def file_header(self, code=None, check_count=b'000001', tag=True):
        code = code or (b'0256' if self.fixed else b'0090')
        body = (
            b'FILE0001'.ljust(15) +
            b'REQ0001'.ljust(15) +
            b'0100' +
            b'20261016' +
            b'093000' +
            check_count +
            code
        )
        if code in (b'0256', b'0090'):
            body += b' ' * FILLERS[b'1200'][0 if code == b'0256' else 1]

        return (b'1200' if tag else b'') + body

    def check_index(self, check_number=b'000000000000123', image_count=b'0002', tag=True):
        body = (
            b'0001' +
            b'021000021' +
            b'12345678901234567890' +
            check_number +
            b'0000012550' +
            b'000000000000001' +
            b'20261015' +
            image_count +
            self.filler(b'1201')
        )
        return (b'1201' if tag else b'') + body

    def image_header(self, image_type=b'TF01', side=b'F', record_count=b'0001', tag=True):
        body = image_type + side + record_count + b'000005' + self.filler(b'1202')
        return (b'1202' if tag else b'') + body

    def image_data(self, payload, declared=None, tag=True):
        declared = declared if declared is not None else b'%04d' % len(payload)
        return (b'1203' if tag else b'') + declared + payload

    def check_trailer(self, tag=True):
        return (b'1204' if tag else b'') + self.filler(b'1204')

    def file_trailer(self, tag=True):
        body = (
            b'FILE0001'.ljust(15) +
            b'REQ0001'.ljust(15) +
            b'0100' +
            b'20261016' +
            b'093000' +
            b'000006' +
            self.filler(b'1209')
        )
        return (b'1209' if tag else b'') + body

    def check(self, check_number, *images):
        '''A check index followed by an image header/data couple for each
        (image type, payload) and the check trailer.'''
        data = self.check_index(check_number=check_number, image_count=b'%04d' % len(images))
        for image_type, payload in images:
            data += self.image_header(image_type=image_type)
            data += self.image_data(payload)

        return data + self.check_trailer()

    def carrier(self, *checks):
        return self.file_header() + b''.join(checks) + self.file_trailer()


@pytest.fixture
def variable():
    return CarrierBuilder(fixed=False)


@pytest.fixture
def fixed():
    return CarrierBuilder(fixed=True)


@pytest.fixture
def collector():
    '''A sink that keeps the artifacts in a list.'''
    artifacts = []

    def _sink(artifact):
        artifacts.append(artifact)

    _sink.artifacts = artifacts

    return _sink
