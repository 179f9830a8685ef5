# SchoolDesk HTTP API
