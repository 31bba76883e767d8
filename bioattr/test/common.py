#!/usr/bin/env python
"""Sample data shared by unit tests"""
from numpy.testing import suppress_warnings
from bioattr.util.services.exceptions import DataWarning, FileFormatWarning

#===============================================================================
# Warnings suppression
#
# Use within bodies of test functions as e.g. `with sup_data: foo`
#===============================================================================

sup_data = suppress_warnings()
sup_data.filter(category=DataWarning)

sup_file = suppress_warnings()
sup_file.filter(category=FileFormatWarning)


#===============================================================================
# PAF
#===============================================================================

PAF_LINES = [
    "read1\t1000\t10\t990\t+\tchr1\t50000\t1200\t2180\t950\t985\t60\ttp:A:P\tcm:i:85\ts1:i:900\tNM:i:35\tdv:f:0.0123\tcg:Z:980M",
    "read2\t532\t0\t532\t-\tchr2\t81000\t40000\t40530\t510\t532\t12\ttp:A:S\tNM:i:22\tZB:B:i,1,2\tZH:H:010203",
    "read3\t800\t100\t700\t+\tchrX\t1000000\t5\t605\t600\t600\t255",
]

PAF_TEXT = "\n".join(PAF_LINES) + "\n"


#===============================================================================
# GFA
#===============================================================================

GFA1_LINES = [
    "H\tVN:Z:1.0",
    "S\t11\tACCTT\tLN:i:5\tRC:i:12",
    "S\t12\t*\tLN:i:1000",
    "L\t11\t+\t12\t-\t4M\tMQ:i:60\tNM:i:0\tID:Z:link1",
    "C\t11\t+\t12\t-\t2\t3M\tRC:i:4",
    "P\tpath1\t11+,12-\t4M\tSH:H:ABCD",
    "T\tpath1\t0\t11\t+\t12\t-\t*",
]

GFA1_TEXT = "\n".join(GFA1_LINES) + "\n"

GFA2_LINES = [
    "H\tVN:Z:2.0\tTS:i:100",
    "S\ts1\t100\tACGT\tRC:i:3",
    "S\ts2\t200\t*",
    "F\ts1\tread7+\t0\t42\t12\t55$\t*\tid:Z:frag1",
    "E\te1\ts1+\ts2-\t10\t100$\t0\t90\t90M",
    "E\t*\ts1-\ts2+\t0\t20\t180\t200$\t4,2,6",
    "G\tg1\ts1+\ts2+\t500\t50",
    "G\t*\ts2-\ts1-\t120\t*",
    "O\tp1\ts1+ e1+ s2-",
    "U\tu1\ts1 s2 e1",
]

GFA2_TEXT = "\n".join(GFA2_LINES) + "\n"


#===============================================================================
# VCF
#===============================================================================

VCF_HEADER_LINES = [
    "##fileformat=VCFv4.3",
    "##source=testSuite",
    '##INFO=<ID=DP,Number=1,Type=Integer,Description="Total Depth">',
    '##INFO=<ID=AF,Number=A,Type=Float,Description="Allele Frequency">',
    '##INFO=<ID=DB,Number=0,Type=Flag,Description="dbSNP membership, build 129">',
    '##INFO=<ID=AD,Number=R,Type=Integer,Description="Allele depths">',
    '##INFO=<ID=TAG,Number=.,Type=String,Description="Free \\"quoted\\" text",Source="unit",Version="3">',
    '##FILTER=<ID=q10,Description="Quality below 10">',
    '##FORMAT=<ID=GT,Number=1,Type=String,Description="Genotype">',
    '##FORMAT=<ID=GQ,Number=1,Type=Integer,Description="Genotype Quality">',
    '##FORMAT=<ID=DP,Number=1,Type=Integer,Description="Read Depth">',
    '##FORMAT=<ID=AD,Number=R,Type=Integer,Description="Allele depths">',
    '##FORMAT=<ID=PL,Number=G,Type=Integer,Description="Phred-scaled likelihoods">',
    "#CHROM\tPOS\tID\tREF\tALT\tQUAL\tFILTER\tINFO\tFORMAT\tNA00001\tNA00002",
]

VCF_RECORD_LINES = [
    "20\t14370\trs6054257\tG\tA\t29\tPASS\tDP=14;AF=0.5;DB\tGT:GQ:DP:AD:PL\t0|0:48:1:1,0:0,10,100\t1|0:48:8:4,4:20,0,30",
    "20\t17330\t.\tT\tA,C\t3.5\tq10\tDP=11;AF=0.017,0.2;AD=4,3,2\tGT:GQ:DP\t0/1:3:5\t./.",
    "20\t1110696\trs6040355;rs6040356\tA\t.\t.\t.\t.\tGT\t0/0\t0/0",
]

VCF_TEXT = "\n".join(VCF_HEADER_LINES + VCF_RECORD_LINES) + "\n"
