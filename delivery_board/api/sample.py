"""Sample report payload used when no report URL is configured."""

SAMPLE_REPORT = {
    "totalRecords": 1,
    "pageSize": 10000,
    "pageIndex": 0,
    "nextPage": None,
    "data": [
        {
            "Number": "17096",
            "Name": "MasTec Union Ridge CMS From AWD",
            "ReleasesBOLTrackingNumber": "https://parcelsapp.com/en/tracking/836689906",
            "MilestoneName": "Union Ridge",
            "ProjectName": "Releases",
            "Type": "Releases",
            "Status": "Done",
            "DueDate": "08/26/2025 11:59:59 PM",
            "CompletionDate": "08/22/2025 01:12:22 PM",
            "ReleasesContractDate": "09/04/2025",
            "CustomerName": "MasTec, Inc.",
            "CustomerNumber": "86",
            "CustomerAddressFullAddress": "P.O. Box 38, Clinton, IN 47842, USA",
            "QuoteShipToLocation": "MasTec - Union Ridge",
        }
    ],
}
